"""
Happy Thoughts API - Thought Service (Business Logic)
=======================================================

What:  CRUD, likes and ownership rules for thoughts.
How:   Stateless; each method receives the request's AsyncSession. Commit or
       rollback happens in get_db_session, so a method that raises leaves
       no partial writes behind.
Who:   Called by the thoughts routes.

Ownership:
    - delete and message edit: owner only (ForbiddenError otherwise)
    - like: anyone, no authentication
    - unlike: any authenticated user
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import case, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from happy_thoughts.exceptions import (
    DatabaseError,
    ForbiddenError,
    HappyThoughtsError,
    NotFoundError,
)
from happy_thoughts.models.thought import Thought
from happy_thoughts.models.user import User
from happy_thoughts.schemas.thought import ThoughtPage, ThoughtResponse
from happy_thoughts.services.thought_query import ThoughtQuery

logger = logging.getLogger(__name__)


class ThoughtService:
    """
    Business logic layer for thought operations.

    Error Handling Strategy:
        Application errors (NotFound, Forbidden, Validation) propagate as-is.
        SQLAlchemy errors are wrapped in DatabaseError so the client only ever
        sees a generic 500 message.
    """

    async def list_thoughts(self, db: AsyncSession, query: ThoughtQuery) -> ThoughtPage:
        """
        Return one page of thoughts matching the query.

        Two statements share the same filters:
            SELECT ... WHERE <filters> ORDER BY <sort> LIMIT :limit OFFSET :offset
            SELECT count(*) ... WHERE <filters>
        """
        try:
            page_stmt = (
                select(Thought)
                .where(*query.filters)
                .order_by(*query.order_by)
                .offset(query.offset)
                .limit(query.limit)
            )
            thoughts = list((await db.execute(page_stmt)).scalars().all())

            count_stmt = select(func.count(Thought.id)).where(*query.filters)
            total = (await db.execute(count_stmt)).scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Database error listing thoughts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve thoughts. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return ThoughtPage(
            total_results=total,
            current_page=query.page,
            results_per_page=len(thoughts),
            thoughts=[ThoughtResponse.model_validate(t) for t in thoughts],
        )

    async def get_thought(self, db: AsyncSession, thought_id: uuid.UUID) -> Thought:
        """
        Fetch one thought by primary key.

        Raises:
            NotFoundError: no thought with that id
            DatabaseError: query failed
        """
        try:
            thought = await db.get(Thought, thought_id, populate_existing=True)
        except SQLAlchemyError as e:
            logger.error("Database error fetching thought %s: %s", thought_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the thought. Please try again.",
                context={"thought_id": str(thought_id)},
            )
        if thought is None:
            raise NotFoundError(resource="thought", resource_id=str(thought_id))
        return thought

    async def create_thought(self, db: AsyncSession, user: User, message: str) -> Thought:
        try:
            thought = Thought(message=message, hearts=0, user_id=user.id)
            db.add(thought)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating thought: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the thought. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Thought %s created by user %s", thought.id, user.id)
        return thought

    async def delete_thought(
        self, db: AsyncSession, user: User, thought_id: uuid.UUID
    ) -> Thought:
        """
        Delete a thought owned by the caller and return the deleted record.

        Raises:
            NotFoundError: no thought with that id
            ForbiddenError: the caller does not own the thought
        """
        thought = await self.get_thought(db, thought_id)
        self._ensure_owner(thought, user, action="delete")
        try:
            await db.delete(thought)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting thought %s: %s", thought_id, str(e))
            raise DatabaseError(message="Could not delete the thought. Please try again.")
        logger.info("Thought %s deleted by user %s", thought_id, user.id)
        return thought

    async def like_thought(self, db: AsyncSession, thought_id: uuid.UUID) -> Thought:
        """
        Add one heart.

        A single UPDATE ... SET hearts = hearts + 1 so concurrent likes all
        count.
        """
        try:
            result = await db.execute(
                update(Thought)
                .where(Thought.id == thought_id)
                .values(hearts=Thought.hearts + 1)
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            logger.error("Database error liking thought %s: %s", thought_id, str(e))
            raise DatabaseError(message="Could not like the thought. Please try again.")
        if result.rowcount == 0:
            raise NotFoundError(resource="thought", resource_id=str(thought_id))
        return await self.get_thought(db, thought_id)

    async def update_thought(
        self,
        db: AsyncSession,
        user: User,
        thought_id: uuid.UUID,
        message: Optional[str] = None,
        unlike: bool = False,
    ) -> Thought:
        """
        Edit the message and/or remove one heart.

        The message edit is owner-only; unlike is open to any authenticated
        user and never takes hearts below zero. With neither requested the
        thought is returned unchanged.

        Raises:
            NotFoundError: no thought with that id
            ForbiddenError: message edit by someone other than the owner
        """
        thought = await self.get_thought(db, thought_id)
        if message is None and not unlike:
            return thought

        if message is not None:
            self._ensure_owner(thought, user, action="edit")

        try:
            if message is not None:
                thought.message = message
            if unlike:
                await db.execute(
                    update(Thought)
                    .where(Thought.id == thought_id)
                    .values(hearts=case((Thought.hearts > 0, Thought.hearts - 1), else_=0))
                    .execution_options(synchronize_session=False)
                )
            await db.flush()
        except HappyThoughtsError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating thought %s: %s", thought_id, str(e))
            raise DatabaseError(message="Could not update the thought. Please try again.")

        return await self.get_thought(db, thought_id)

    @staticmethod
    def _ensure_owner(thought: Thought, user: User, action: str) -> None:
        if thought.user_id != user.id:
            logger.warning(
                "User %s tried to %s thought %s owned by %s",
                user.id, action, thought.id, thought.user_id,
            )
            raise ForbiddenError(message=f"You can only {action} your own thoughts.")


thought_service = ThoughtService()
