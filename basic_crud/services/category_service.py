"""
Category service — categories are only created by upsert on their
unique name (seeding) and read back for association.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from basic_crud.models import Category

logger = logging.getLogger(__name__)


def _category_to_dict(category: Category) -> dict:
    return {"id": category.id, "name": category.name}


async def get_categories(db: AsyncSession) -> list[dict]:
    result = await db.execute(select(Category))
    return [_category_to_dict(c) for c in result.scalars().all()]


async def upsert_category(db: AsyncSession, name: str) -> tuple[dict, bool]:
    """
    Return the category called *name*, creating it when absent.

    Returns ``(category_dict, created)``.
    """
    result = await db.execute(select(Category).where(Category.name == name))
    category = result.scalar_one_or_none()
    if category is not None:
        return _category_to_dict(category), False

    category = Category(name=name)
    db.add(category)
    await db.flush()
    logger.info("Created category id=%s name=%r", category.id, name)
    return _category_to_dict(category), True
