import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from config import DEFAULT_CATEGORIES
from models import CategoryModel

logger = logging.getLogger(__name__)


async def seed_default_categories(db: AsyncSession, user_id: int) -> List[str]:
    """
    Add the default categories the user does not already have.

    Existing names are skipped, so running this twice changes nothing.
    Returns the names that were added; the caller commits.
    """
    result = await db.execute(select(CategoryModel.name).where(CategoryModel.user_id == user_id))
    existing = set(result.scalars().all())

    added = []
    for entry in DEFAULT_CATEGORIES:
        if entry["name"] in existing:
            logger.info("Category '%s' already exists for user %s. Skipping.", entry["name"], user_id)
            continue
        db.add(CategoryModel(user_id=user_id, name=entry["name"], type=entry["type"]))
        added.append(entry["name"])

    if added:
        logger.info("Added default categories for user %s: %s", user_id, ", ".join(added))
    return added
