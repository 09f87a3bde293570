"""
User service — CRUD operations for the User aggregate.

Every id-addressed operation first loads the row and raises
``NotFoundError`` when it is missing, before any write is attempted.
Email uniqueness is enforced by the database; the resulting
``IntegrityError`` is left for the caller.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from basic_crud.exceptions import NotFoundError
from basic_crud.models import User
from basic_crud.schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
    }


async def _get_user_or_raise(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("User", user_id)
    return user


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def get_users(db: AsyncSession) -> list[dict]:
    """Return every user; posts are not expanded."""
    result = await db.execute(select(User))
    return [_user_to_dict(u) for u in result.scalars().all()]


async def get_user(db: AsyncSession, user_id: int) -> dict:
    user = await _get_user_or_raise(db, user_id)
    return _user_to_dict(user)


async def create_user(db: AsyncSession, data: UserCreate) -> dict:
    """
    Insert a new user and return its serialised dict.

    A duplicate email raises ``IntegrityError`` on flush.
    """
    user = User(name=data.name, email=data.email)
    db.add(user)
    await db.flush()
    logger.info("Created user id=%s", user.id)
    return _user_to_dict(user)


async def update_user(db: AsyncSession, user_id: int, data: UserUpdate) -> dict:
    """
    Apply the fields explicitly present in *data* to an existing user.

    An empty patch is a successful no-op.
    """
    user = await _get_user_or_raise(db, user_id)

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(user, field, value)

    await db.flush()
    logger.info("Updated user id=%s fields=%s", user_id, sorted(update_data))
    return _user_to_dict(user)


async def delete_user(db: AsyncSession, user_id: int) -> dict:
    """Delete the user and return its representation prior to deletion."""
    user = await _get_user_or_raise(db, user_id)
    data = _user_to_dict(user)

    await db.delete(user)
    await db.flush()
    logger.info("Deleted user id=%s", user_id)
    return data


async def upsert_user(
    db: AsyncSession, data: UserCreate, update: UserUpdate | None = None
) -> tuple[dict, bool]:
    """
    Insert-or-update keyed by email.

    Returns ``(user_dict, created)``.  An existing row receives only the
    fields set on *update*; with no *update* it is returned untouched, so
    repeated calls with the same email are idempotent.
    """
    result = await db.execute(select(User).where(User.email == data.email))
    user = result.scalar_one_or_none()
    if user is None:
        return await create_user(db, data), True

    if update is not None:
        for field, value in update.model_dump(exclude_unset=True).items():
            setattr(user, field, value)
        await db.flush()
    return _user_to_dict(user), False
