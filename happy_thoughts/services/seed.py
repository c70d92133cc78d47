"""
Happy Thoughts API - Seed Data Loader
=======================================

What:  Replaces every thought with the bundled seed dataset.
When:  At startup when RESET_DB is set.

Seed format (happy_thoughts/data/thoughts.json), an ordered array of:
    {"message": str, "hearts"?: int, "createdAt"?: ISO datetime, "userId"?: UUID}
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, TypeAdapter
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from happy_thoughts.models.thought import SEED_USER_ID, Thought

logger = logging.getLogger(__name__)

SEED_FILE = Path(__file__).resolve().parent.parent / "data" / "thoughts.json"


class SeedThought(BaseModel):
    message: str
    hearts: int = Field(default=0, ge=0)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    user_id: uuid.UUID = Field(default=SEED_USER_ID, alias="userId")


def load_seed_data(path: Path = SEED_FILE) -> List[SeedThought]:
    with path.open(encoding="utf-8") as f:
        raw = json.load(f)
    return TypeAdapter(List[SeedThought]).validate_python(raw)


async def reset_thoughts(db: AsyncSession, path: Path = SEED_FILE) -> int:
    """
    Truncate the thoughts table and insert the seed records in file order.

    Returns the number of thoughts inserted. The caller commits.
    """
    seeds = load_seed_data(path)
    await db.execute(delete(Thought))
    for seed in seeds:
        db.add(
            Thought(
                message=seed.message,
                hearts=seed.hearts,
                created_at=seed.created_at or datetime.now(timezone.utc),
                user_id=seed.user_id,
            )
        )
    await db.flush()
    logger.info("Thoughts collection reset with %d seed records", len(seeds))
    return len(seeds)
