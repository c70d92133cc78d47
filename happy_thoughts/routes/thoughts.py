"""
Happy Thoughts API - Thought Route Handlers
=============================================

What:  The /thoughts endpoints.
How:   Each handler validates input, makes one ThoughtService call and wraps
       the result in the response envelope. Auth-only routes receive the
       caller as an explicit `user` argument.

Route Inventory:
    GET    /thoughts               list with filter/sort/pagination
    GET    /thoughts/{id}          single thought
    POST   /thoughts               create (auth)
    DELETE /thoughts/{id}          delete (auth, owner only)
    PATCH  /thoughts/{id}/like     add a heart
    PATCH  /thoughts/{id}          edit message (owner only) and/or unlike (auth)

Malformed ids fail path validation and come back as 400.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from happy_thoughts.database import get_db_session
from happy_thoughts.dependencies import require_user
from happy_thoughts.models.user import User
from happy_thoughts.schemas.common import Envelope, ErrorEnvelope
from happy_thoughts.schemas.thought import (
    ThoughtCreate,
    ThoughtPage,
    ThoughtResponse,
    ThoughtUpdate,
)
from happy_thoughts.services.thought_query import build_thought_query
from happy_thoughts.services.thought_service import thought_service


router = APIRouter(prefix="/thoughts", tags=["Thoughts"])

NOT_FOUND = {404: {"description": "Thought not found", "model": ErrorEnvelope}}
BAD_REQUEST = {400: {"description": "Invalid input", "model": ErrorEnvelope}}
UNAUTHORIZED = {401: {"description": "Missing or unknown access token", "model": ErrorEnvelope}}
FORBIDDEN = {403: {"description": "Caller does not own the thought", "model": ErrorEnvelope}}


@router.get(
    "",
    response_model=Envelope[ThoughtPage],
    responses=BAD_REQUEST,
    summary="List thoughts with filtering, sorting and pagination",
)
async def list_thoughts(
    hearts: Optional[str] = Query(default=None, description="Minimum number of hearts"),
    message: Optional[str] = Query(default=None, description="Case-insensitive text search"),
    thought_id: Optional[str] = Query(default=None, alias="id", description="Exact thought id"),
    sort: Optional[str] = Query(
        default=None,
        description="createdAt, createdAt_desc, createdAt_asc or hearts",
    ),
    page: Optional[str] = Query(default=None, description="1-indexed page (default 1)"),
    limit: Optional[str] = Query(default=None, description="Page size (default 10)"),
    db: AsyncSession = Depends(get_db_session),
) -> Envelope[ThoughtPage]:
    """
    Example requests:
        GET /thoughts?hearts=10&sort=hearts
        GET /thoughts?message=coffee&page=2&limit=5

    Non-numeric page/limit fall back to their defaults instead of failing.
    """
    query = build_thought_query(
        hearts=hearts,
        message=message,
        sort=sort,
        page=page,
        limit=limit,
        thought_id=thought_id,
    )
    result = await thought_service.list_thoughts(db, query)
    return Envelope(response=result, message="Thoughts retrieved successfully.")


@router.get(
    "/{thought_id}",
    response_model=Envelope[ThoughtResponse],
    responses={**NOT_FOUND, **BAD_REQUEST},
    summary="Get a single thought by id",
)
async def get_thought(
    thought_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Envelope[ThoughtResponse]:
    thought = await thought_service.get_thought(db, thought_id)
    return Envelope(
        response=ThoughtResponse.model_validate(thought),
        message="Thought retrieved successfully.",
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[ThoughtResponse],
    responses={**BAD_REQUEST, **UNAUTHORIZED},
    summary="Post a new thought",
)
async def create_thought(
    body: ThoughtCreate,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> Envelope[ThoughtResponse]:
    thought = await thought_service.create_thought(db, user, body.message)
    return Envelope(
        response=ThoughtResponse.model_validate(thought),
        message="Thought created successfully.",
    )


@router.delete(
    "/{thought_id}",
    response_model=Envelope[ThoughtResponse],
    responses={**NOT_FOUND, **UNAUTHORIZED, **FORBIDDEN},
    summary="Delete one of your thoughts",
)
async def delete_thought(
    thought_id: uuid.UUID,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> Envelope[ThoughtResponse]:
    thought = await thought_service.delete_thought(db, user, thought_id)
    return Envelope(
        response=ThoughtResponse.model_validate(thought),
        message="Thought deleted successfully.",
    )


@router.patch(
    "/{thought_id}/like",
    response_model=Envelope[ThoughtResponse],
    responses={**NOT_FOUND, **BAD_REQUEST},
    summary="Add a heart to a thought",
)
async def like_thought(
    thought_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Envelope[ThoughtResponse]:
    thought = await thought_service.like_thought(db, thought_id)
    return Envelope(
        response=ThoughtResponse.model_validate(thought),
        message="Thought liked successfully.",
    )


@router.patch(
    "/{thought_id}",
    response_model=Envelope[ThoughtResponse],
    responses={**NOT_FOUND, **BAD_REQUEST, **UNAUTHORIZED, **FORBIDDEN},
    summary="Edit your thought's message and/or remove a heart",
)
async def update_thought(
    thought_id: uuid.UUID,
    body: Optional[ThoughtUpdate] = None,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db_session),
) -> Envelope[ThoughtResponse]:
    """
    Body fields are independent:
        {"message": "..."}   owner only
        {"unlike": true}     any signed-in user, hearts never drop below 0
    An empty or missing body returns the thought unchanged.
    """
    body = body or ThoughtUpdate()
    thought = await thought_service.update_thought(
        db, user, thought_id, message=body.message, unlike=body.unlike
    )
    if body.message is None and not body.unlike:
        message = "Nothing to update."
    else:
        message = "Thought updated successfully."
    return Envelope(response=ThoughtResponse.model_validate(thought), message=message)
