"""
Happy Thoughts API - User Route Handlers
==========================================

What:  Sign-up (POST /users), sign-in (POST /sessions) and the protected
       demo resource (GET /secrets).
How:   Body validated by the schemas; logic delegated to UserService.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from happy_thoughts.database import get_db_session
from happy_thoughts.dependencies import require_user
from happy_thoughts.models.user import User
from happy_thoughts.schemas.common import Envelope, ErrorEnvelope, SecretPayload
from happy_thoughts.schemas.user import SessionCreate, SessionResponse, UserCreate, UserCreated
from happy_thoughts.services.user_service import user_service


router = APIRouter(tags=["Users"])


@router.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[UserCreated],
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorEnvelope},
        409: {"description": "Name or email already registered", "model": ErrorEnvelope},
    },
    summary="Register a new user",
)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> Envelope[UserCreated]:
    user = await user_service.create_user(
        db, name=body.name, email=body.email, password=body.password
    )
    return Envelope(
        response=UserCreated.model_validate(user),
        message="User created successfully.",
    )


@router.post(
    "/sessions",
    response_model=Envelope[SessionResponse],
    responses={401: {"description": "Wrong email or password", "model": ErrorEnvelope}},
    summary="Sign in and receive the user's access token",
)
async def create_session(
    body: SessionCreate,
    db: AsyncSession = Depends(get_db_session),
) -> Envelope[SessionResponse]:
    user = await user_service.authenticate(db, email=body.email, password=body.password)
    return Envelope(
        response=SessionResponse.model_validate(user),
        message="Signed in successfully.",
    )


@router.get(
    "/secrets",
    response_model=Envelope[SecretPayload],
    responses={401: {"description": "Missing or unknown access token", "model": ErrorEnvelope}},
    summary="Protected demo resource",
)
async def get_secret(user: User = Depends(require_user)) -> Envelope[SecretPayload]:
    return Envelope(
        response=SecretPayload(secret=f"Hello {user.name}, this is a happy secret!"),
        message="Secret retrieved.",
    )
