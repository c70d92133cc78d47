"""
Happy Thoughts API - User SQLAlchemy Model
============================================

What:  ORM model for the `users` table.
Who:   Used by UserService for sign-up/sign-in and by the auth dependency
       for token lookup.

Table Design:
    - name, email and access_token are each unique (one index apiece)
    - password_hash holds a salted bcrypt hash, never the password
    - access_token is issued once at sign-up and used as a bearer credential
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from happy_thoughts.database import Base
from happy_thoughts.models.types import UTCDateTime, utc_now


class User(Base):
    """A registered user who can post, edit and delete their own thoughts."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
    )

    email: Mapped[str] = mapped_column(
        String(254),
        nullable=False,
        unique=True,
    )

    password_hash: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
    )

    # 128 random bytes, hex-encoded
    access_token: Mapped[str] = mapped_column(
        String(256),
        nullable=False,
        unique=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}')>"
