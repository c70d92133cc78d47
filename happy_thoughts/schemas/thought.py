"""
Happy Thoughts API - Thought Schemas
======================================

What:  Request bodies and response payloads for the /thoughts endpoints.
How:   Messages are trimmed before the 5-140 character check, matching the
       rule the ORM model applies on every write.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from happy_thoughts.models.thought import MESSAGE_MAX_LENGTH, MESSAGE_MIN_LENGTH
from happy_thoughts.schemas.common import CamelModel


class ThoughtCreate(BaseModel):
    """Body of POST /thoughts."""

    model_config = ConfigDict(str_strip_whitespace=True)

    message: str = Field(min_length=MESSAGE_MIN_LENGTH, max_length=MESSAGE_MAX_LENGTH)


class ThoughtUpdate(BaseModel):
    """
    Body of PATCH /thoughts/{id}.

    message and unlike are independent; either, both or neither may be sent.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    message: Optional[str] = Field(
        default=None,
        min_length=MESSAGE_MIN_LENGTH,
        max_length=MESSAGE_MAX_LENGTH,
        description="New message text (owner only)",
    )
    unlike: bool = Field(default=False, description="Remove one heart, never below zero")


class ThoughtResponse(CamelModel):
    id: uuid.UUID
    message: str
    hearts: int
    created_at: datetime
    user_id: uuid.UUID


class ThoughtPage(CamelModel):
    """
    One page of the filtered, sorted thoughts list.

    total_results counts every match before pagination; results_per_page is
    the number actually returned (at most the requested limit).
    """
    total_results: int
    current_page: int
    results_per_page: int
    thoughts: List[ThoughtResponse]
