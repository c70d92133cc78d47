"""
Happy Thoughts API - Thought SQLAlchemy Model
===============================================

What:  ORM model representing the `thoughts` table.
Who:   Used by ThoughtService for CRUD, by the seeder, and by Alembic.

Table Design:
    - UUID primary key
    - message: 5-140 characters after trimming, enforced by a validator so
      every write path (API, seeder) obeys the same rule
    - hearts: never negative (CHECK constraint)
    - user_id: owner reference, not a foreign key. Deleting a user leaves
      their thoughts in place.

Indexes:
    created_at and hearts back the two sort orders the list endpoint offers.
"""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, validates

from happy_thoughts.database import Base
from happy_thoughts.exceptions import ValidationError
from happy_thoughts.models.types import UTCDateTime, utc_now

MESSAGE_MIN_LENGTH = 5
MESSAGE_MAX_LENGTH = 140

# Owner assigned to seeded thoughts that carry no userId
SEED_USER_ID = uuid.UUID(int=0)


class Thought(Base):
    """
    A short happy thought.

    Lifecycle:
        1. Created by an authenticated user (hearts = 0)
        2. hearts bumped by anyone via the like endpoint
        3. hearts decremented (floored at 0) by any authenticated user via unlike
        4. message edited or the row deleted by its owner only
    """

    __tablename__ = "thoughts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    message: Mapped[str] = mapped_column(
        String(MESSAGE_MAX_LENGTH),
        nullable=False,
    )

    hearts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utc_now,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        default=SEED_USER_ID,
        index=True,
    )

    __table_args__ = (
        CheckConstraint("hearts >= 0", name="ck_thoughts_hearts_non_negative"),
        Index("idx_thoughts_created_at", "created_at"),
        Index("idx_thoughts_hearts", "hearts"),
    )

    @validates("message")
    def validate_message(self, key: str, value: str) -> str:
        if value is None:
            raise ValidationError(message="Message is required.", field=key)
        trimmed = value.strip()
        if not MESSAGE_MIN_LENGTH <= len(trimmed) <= MESSAGE_MAX_LENGTH:
            raise ValidationError(
                message=(
                    f"Message must be between {MESSAGE_MIN_LENGTH} and "
                    f"{MESSAGE_MAX_LENGTH} characters."
                ),
                field=key,
            )
        return trimmed

    @validates("hearts")
    def validate_hearts(self, key: str, value: int) -> int:
        if value is None or value < 0:
            raise ValidationError(message="Hearts must be zero or more.", field=key)
        return value

    def __repr__(self) -> str:
        return f"<Thought(id={self.id}, hearts={self.hearts})>"
