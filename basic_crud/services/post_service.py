"""
Post service — business logic for the Post aggregate.

Design notes
------------
- Category association is written straight to the ``post_categories``
  join table by id.  Ids are not checked beforehand: a missing category
  (or user) surfaces as the database's ``IntegrityError`` on flush.
- Create *connects* the given categories; update *sets* them, replacing
  the previous association with exactly the new list.  Duplicate ids in
  either list collapse to one join row.
- Reads use ``selectinload`` for categories and ``joinedload`` for the
  owning user.  ``populate_existing`` is required after a join-table
  write so the identity-mapped Post picks up the new collection.
- Service functions flush but do not commit; the transaction boundary
  is owned by the ``get_db`` dependency in the router layer.
"""
import logging

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from basic_crud.exceptions import NotFoundError
from basic_crud.models import Post, post_categories
from basic_crud.schemas import PostCreate, PostUpdate

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------


def _post_to_dict(post: Post) -> dict:
    """Serialise the Post row alone, without relations."""
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "userId": post.user_id,
    }


def _post_with_categories_to_dict(post: Post) -> dict:
    data = _post_to_dict(post)
    data["categories"] = [{"id": c.id, "name": c.name} for c in post.categories]
    return data


def _post_detail_to_dict(post: Post) -> dict:
    data = _post_with_categories_to_dict(post)
    user = post.user
    data["user"] = (
        {"id": user.id, "name": user.name, "email": user.email} if user is not None else None
    )
    return data


# ---------------------------------------------------------------------------
# Association helpers
# ---------------------------------------------------------------------------

async def _connect_categories(db: AsyncSession, post_id: int, category_ids: list[int]) -> None:
    """Add join rows for *category_ids* that are not yet linked to the post."""
    wanted = list(dict.fromkeys(category_ids))
    if not wanted:
        return

    existing = await db.execute(
        select(post_categories.c.category_id).where(post_categories.c.post_id == post_id)
    )
    linked = set(existing.scalars().all())
    rows = [{"post_id": post_id, "category_id": cid} for cid in wanted if cid not in linked]
    if rows:
        await db.execute(insert(post_categories), rows)


async def _set_categories(db: AsyncSession, post_id: int, category_ids: list[int]) -> None:
    """Replace the post's categories with exactly *category_ids*."""
    await db.execute(delete(post_categories).where(post_categories.c.post_id == post_id))
    await _connect_categories(db, post_id, category_ids)


async def _load_post(db: AsyncSession, post_id: int, with_user: bool = False) -> Post | None:
    options = [selectinload(Post.categories)]
    if with_user:
        options.append(joinedload(Post.user))

    q = (
        select(Post)
        .where(Post.id == post_id)
        .options(*options)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(q)
    return result.unique().scalar_one_or_none()


async def _get_post_or_raise(db: AsyncSession, post_id: int) -> Post:
    post = await _load_post(db, post_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    return post


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def get_posts(db: AsyncSession) -> list[dict]:
    """Return every post with its categories, in store order."""
    result = await db.execute(select(Post).options(selectinload(Post.categories)))
    return [_post_with_categories_to_dict(p) for p in result.scalars().all()]


async def get_post(db: AsyncSession, post_id: int) -> dict:
    post = await _get_post_or_raise(db, post_id)
    return _post_with_categories_to_dict(post)


async def create_post(db: AsyncSession, data: PostCreate) -> dict:
    """
    Insert a post owned by ``data.user_id`` and connect its categories.

    Returns the post with its categories and owning user.
    """
    post = Post(title=data.title, content=data.content, user_id=data.user_id)
    db.add(post)
    await db.flush()

    if data.categories:
        await _connect_categories(db, post.id, data.categories)
        await db.flush()

    post = await _load_post(db, post.id, with_user=True)
    logger.info("Created post id=%s user_id=%s", post.id, post.user_id)
    return _post_detail_to_dict(post)


async def update_post(db: AsyncSession, post_id: int, data: PostUpdate) -> dict:
    """
    Partially update an existing post.

    Only fields explicitly set in the payload are modified.  When
    ``categories`` is given (an empty list included) the association is
    replaced; when omitted it is left alone.
    """
    post = await _get_post_or_raise(db, post_id)

    update_data = data.model_dump(exclude_unset=True)
    category_ids: list[int] | None = update_data.pop("categories", None)

    for field, value in update_data.items():
        setattr(post, field, value)
    await db.flush()

    if category_ids is not None:
        await _set_categories(db, post_id, category_ids)
        await db.flush()
        post = await _load_post(db, post_id)

    logger.info(
        "Updated post id=%s fields=%s categories_replaced=%s",
        post_id,
        sorted(update_data),
        category_ids is not None,
    )
    return _post_with_categories_to_dict(post)


async def delete_post(db: AsyncSession, post_id: int) -> dict:
    """Delete the post and return its row as it was before deletion."""
    post = await _get_post_or_raise(db, post_id)
    data = _post_to_dict(post)

    await db.delete(post)
    await db.flush()
    logger.info("Deleted post id=%s", post_id)
    return data
