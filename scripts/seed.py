"""Idempotent database seeder: sample users, posts and categories."""
import argparse
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from basic_crud.database import engine, async_session, Base
from basic_crud.logging_config import configure_logging
from basic_crud.schemas import PostCreate, UserCreate
from basic_crud.services import category_service, post_service, user_service

logger = logging.getLogger("basic_crud.seed")

CATEGORIES = ["Tech", "Lifestyle"]

# email -> (name, [(title, content, [category names])])
USERS = {
    "alice@example.com": (
        "Alice",
        [
            ("First Post", "Hello World!", ["Tech"]),
            ("Second Post", "Prisma is awesome", ["Tech", "Lifestyle"]),
        ],
    ),
    "bob@example.com": (
        "Bob",
        [
            ("Bob's Post", "Loved the lifestyle category", ["Lifestyle"]),
        ],
    ),
}


async def seed_database(db: AsyncSession) -> None:
    """
    Populate *db* with the sample data.

    Categories and users are upserted on their unique key.  A user's
    posts are only created together with the user, so running the seed
    again adds nothing.
    """
    category_ids = {}
    for name in CATEGORIES:
        category, _ = await category_service.upsert_category(db, name)
        category_ids[name] = category["id"]

    for email, (name, posts) in USERS.items():
        user, created = await user_service.upsert_user(db, UserCreate(name=name, email=email))
        if not created:
            logger.info("User %s already present, skipping its posts", email)
            continue
        for title, content, categories in posts:
            await post_service.create_post(
                db,
                PostCreate(
                    title=title,
                    content=content,
                    user_id=user["id"],
                    categories=[category_ids[c] for c in categories],
                ),
            )


async def seed(reset: bool = False) -> None:
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        await seed_database(session)
        await session.commit()

    await engine.dispose()
    logger.info("Database has been seeded")


def main():
    parser = argparse.ArgumentParser(description="Seed the database with sample data")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    args = parser.parse_args()
    configure_logging()
    asyncio.run(seed(reset=args.reset))


if __name__ == "__main__":
    main()
