"""SQLAlchemy ORM models. Importing this package registers every table on Base."""

from happy_thoughts.models.thought import SEED_USER_ID, Thought
from happy_thoughts.models.user import User

__all__ = ["SEED_USER_ID", "Thought", "User"]
