"""
Happy Thoughts API - Authentication Dependency
================================================

What:  Resolves the bearer token on a request to a User.
How:   FastAPI dependency. Routes that need a user declare
       `user: User = Depends(require_user)` and receive it as a plain
       argument; nothing is stored on shared state.

Outcomes:
    No Authorization header (or not a Bearer credential)
        → UnauthenticatedError "Unauthorized: No access token provided."
    Token matches no user
        → UnauthenticatedError "Unauthorized: Access token invalid or missing."
    Store failure during lookup
        → DatabaseError (500)
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from happy_thoughts.database import get_db_session
from happy_thoughts.exceptions import UnauthenticatedError
from happy_thoughts.models.user import User
from happy_thoughts.services.user_service import user_service

logger = logging.getLogger(__name__)

# auto_error=False so missing credentials reach our own error envelope
bearer_scheme = HTTPBearer(auto_error=False)


async def require_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError(message="Unauthorized: No access token provided.")

    user = await user_service.get_by_token(db, credentials.credentials)
    if user is None:
        logger.info("Rejected request with unknown access token")
        raise UnauthenticatedError(message="Unauthorized: Access token invalid or missing.")
    return user
