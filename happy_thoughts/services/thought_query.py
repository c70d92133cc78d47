"""
Happy Thoughts API - Thought Query Builder
============================================

What:  Turns the raw query-string parameters of GET /thoughts into a
       validated filter, ordering and page window.
How:   Pure function over strings; returns SQLAlchemy expressions that
       ThoughtService applies to both the page query and the count query.

Parameters:
    hearts   non-negative integer, keeps thoughts with at least that many hearts
    message  case-insensitive substring of the message text
    id       exact thought id
    sort     createdAt | createdAt_desc | createdAt_asc | hearts
    page     1-indexed page number (default 1)
    limit    page size (default 10)

Bad hearts/sort/id values raise ValidationError (400). Bad page/limit values
fall back to their defaults.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlalchemy import false

from happy_thoughts.exceptions import ValidationError
from happy_thoughts.models.thought import Thought

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# Upper bound of the INTEGER hearts column and of page/limit; larger values
# overflow the database drivers
MAX_INT = 2**31 - 1

_NEWEST_FIRST = (Thought.created_at.desc(), Thought.id.desc())

SORT_OPTIONS = {
    "createdAt": _NEWEST_FIRST,
    "createdAt_desc": _NEWEST_FIRST,
    "createdAt_asc": (Thought.created_at.asc(), Thought.id.asc()),
    "hearts": (Thought.hearts.desc(), Thought.id.asc()),
}

# Applied when no sort is requested
STORAGE_ORDER = (Thought.created_at.asc(), Thought.id.asc())


@dataclass
class ThoughtQuery:
    """Filter, ordering and page window for one list request."""

    filters: List[Any] = field(default_factory=list)
    order_by: tuple = STORAGE_ORDER
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _parse_min_hearts(value: str) -> int:
    try:
        minimum = int(value.strip())
    except ValueError:
        raise ValidationError(
            message="Invalid 'hearts' parameter. Must be a number.",
            field="hearts",
        )
    if minimum < 0:
        raise ValidationError(
            message="Invalid 'hearts' parameter. Must be a non-negative number.",
            field="hearts",
        )
    return minimum


def _parse_thought_id(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value.strip())
    except ValueError:
        raise ValidationError(
            message=f"Invalid 'id' parameter. '{value}' is not a valid thought id.",
            field="id",
        )


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _positive_int_or(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        number = int(value.strip())
    except ValueError:
        return default
    if number < 1:
        return default
    return min(number, MAX_INT)


def build_thought_query(
    hearts: Optional[str] = None,
    message: Optional[str] = None,
    sort: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    thought_id: Optional[str] = None,
) -> ThoughtQuery:
    """
    Validate list parameters and build the matching ThoughtQuery.

    Raises:
        ValidationError: hearts is not a non-negative integer, sort is not a
            recognised option, or id is not a UUID.
    """
    query = ThoughtQuery(
        page=_positive_int_or(page, DEFAULT_PAGE),
        limit=_positive_int_or(limit, DEFAULT_LIMIT),
    )

    if hearts:
        minimum = _parse_min_hearts(hearts)
        # No stored count can reach a minimum above the column range
        query.filters.append(Thought.hearts >= minimum if minimum <= MAX_INT else false())

    if message:
        query.filters.append(
            Thought.message.ilike(f"%{_escape_like(message)}%", escape="\\")
        )

    if thought_id:
        query.filters.append(Thought.id == _parse_thought_id(thought_id))

    if sort:
        if sort not in SORT_OPTIONS:
            valid = ", ".join(f"'{option}'" for option in SORT_OPTIONS)
            raise ValidationError(
                message=f"Invalid 'sort' parameter. Valid options are {valid}.",
                field="sort",
                context={"valid_options": list(SORT_OPTIONS)},
            )
        query.order_by = SORT_OPTIONS[sort]

    return query
