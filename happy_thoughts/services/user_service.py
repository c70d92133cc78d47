"""
Happy Thoughts API - User Service
===================================

What:  Sign-up, sign-in and token lookup against the users table.
How:   Stateless methods that receive the request's AsyncSession.
Who:   Called by the users routes and by the auth dependency.

Error Handling Strategy:
    - Unique violations (name, email) → ConflictError (409)
    - Unknown email or wrong password → UnauthenticatedError (401)
    - Any other SQLAlchemy failure → DatabaseError (500)
"""

import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from happy_thoughts.exceptions import ConflictError, DatabaseError, UnauthenticatedError
from happy_thoughts.models.user import User
from happy_thoughts.services.credentials import hash_password, issue_token, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Business logic for user accounts and their access tokens."""

    async def create_user(
        self, db: AsyncSession, name: str, email: str, password: str
    ) -> User:
        """
        Register a user with a hashed password and a freshly issued token.

        Raises:
            ConflictError: name or email is already taken
            DatabaseError: the insert failed for any other reason
        """
        try:
            taken = await self._taken_fields(db, name, email)
            if taken:
                raise ConflictError(
                    message=f"A user with that {' and '.join(taken)} already exists.",
                    fields=taken,
                )

            user = User(
                name=name,
                email=email,
                password_hash=hash_password(password),
                access_token=issue_token(),
            )
            db.add(user)
            await db.flush()
            logger.info("User created: %s", user.id)
            return user

        except IntegrityError as e:
            # A concurrent sign-up won the race between the check and the insert
            logger.warning("Duplicate user rejected by store: %s", type(e).__name__)
            raise ConflictError(message="A user with that name or email already exists.")
        except SQLAlchemyError as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the user. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def authenticate(self, db: AsyncSession, email: str, password: str) -> User:
        """
        Return the user matching email and password.

        Raises:
            UnauthenticatedError: unknown email or wrong password
            DatabaseError: lookup failed
        """
        try:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during sign-in: %s", str(e))
            raise DatabaseError(message="Could not sign in. Please try again.")

        if user is None or not verify_password(password, user.password_hash):
            raise UnauthenticatedError(message="Invalid email or password.")
        return user

    async def get_by_token(self, db: AsyncSession, token: str) -> Optional[User]:
        """Exact-match token lookup. Returns None when no user holds the token."""
        try:
            result = await db.execute(select(User).where(User.access_token == token))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error resolving access token: %s", str(e))
            raise DatabaseError(message="Could not verify the access token.")

    async def _taken_fields(self, db: AsyncSession, name: str, email: str) -> list:
        result = await db.execute(
            select(User.name, User.email).where(or_(User.name == name, User.email == email))
        )
        taken = []
        for existing_name, existing_email in result.all():
            if existing_name == name and "name" not in taken:
                taken.append("name")
            if existing_email == email and "email" not in taken:
                taken.append("email")
        return taken


user_service = UserService()
