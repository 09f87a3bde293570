"""
Post endpoint tests — covers creation with category connect, reads with
categories attached, set-semantics updates and deletion.

Categories have no HTTP surface, so they are created through the
category service on a direct session.
"""
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from basic_crud.services import category_service


async def _create_categories(db: AsyncSession, *names: str) -> list[int]:
    ids = []
    for name in names:
        category, _ = await category_service.upsert_category(db, name)
        ids.append(category["id"])
    await db.commit()
    return ids


async def _create_user(client: AsyncClient) -> int:
    resp = await client.post("/users", json={"name": "Alice", "email": "alice@example.com"})
    return resp.json()["id"]


def _category_ids(post: dict) -> set[int]:
    return {c["id"] for c in post["categories"]}


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_post_with_categories(async_client: AsyncClient, db_session: AsyncSession):
    """Created post is returned with its categories and owning user."""
    tech, life = await _create_categories(db_session, "Tech", "Lifestyle")
    user_id = await _create_user(async_client)

    resp = await async_client.post("/posts", json={
        "title": "First Post",
        "content": "Hello World!",
        "userId": user_id,
        "categories": [tech, life],
    })
    assert resp.status_code == 201
    post = resp.json()
    assert post["title"] == "First Post"
    assert post["content"] == "Hello World!"
    assert post["userId"] == user_id
    assert _category_ids(post) == {tech, life}
    assert post["user"] == {"id": user_id, "name": "Alice", "email": "alice@example.com"}


@pytest.mark.asyncio
async def test_create_post_without_content_or_categories(async_client: AsyncClient):
    user_id = await _create_user(async_client)
    resp = await async_client.post("/posts", json={"title": "Bare", "userId": user_id})
    assert resp.status_code == 201
    post = resp.json()
    assert post["content"] is None
    assert post["categories"] == []


@pytest.mark.asyncio
async def test_create_post_unknown_user(async_client: AsyncClient):
    """A userId with no matching user is a constraint violation."""
    resp = await async_client.post("/posts", json={"title": "Orphan", "userId": 999})
    assert resp.status_code == 409

    resp = await async_client.get("/posts")
    assert resp.json() == []


@pytest.mark.asyncio
async def test_create_post_unknown_category(async_client: AsyncClient):
    user_id = await _create_user(async_client)
    resp = await async_client.post("/posts", json={
        "title": "Dangling",
        "userId": user_id,
        "categories": [42],
    })
    assert resp.status_code == 409

    resp = await async_client.get("/posts")
    assert resp.json() == []


@pytest.mark.asyncio
async def test_create_post_rejects_bad_shapes(async_client: AsyncClient):
    user_id = await _create_user(async_client)

    resp = await async_client.post("/posts", json={"userId": user_id})
    assert resp.status_code == 422

    resp = await async_client.post("/posts", json={"title": "T", "userId": "1"})
    assert resp.status_code == 422

    resp = await async_client.post("/posts", json={
        "title": "T", "userId": user_id, "categories": ["Tech"],
    })
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_posts_include_categories(async_client: AsyncClient, db_session: AsyncSession):
    (tech,) = await _create_categories(db_session, "Tech")
    user_id = await _create_user(async_client)
    for i in range(2):
        await async_client.post("/posts", json={
            "title": f"Post {i}", "userId": user_id, "categories": [tech],
        })

    resp = await async_client.get("/posts")
    assert resp.status_code == 200
    posts = resp.json()
    assert len(posts) == 2
    assert all(p["categories"] == [{"id": tech, "name": "Tech"}] for p in posts)


@pytest.mark.asyncio
async def test_get_post_not_found(async_client: AsyncClient):
    resp = await async_client.get("/posts/99999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Post with id 99999 not found."


@pytest.mark.asyncio
async def test_post_id_must_be_integer(async_client: AsyncClient):
    resp = await async_client.delete("/posts/first")
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_post_replaces_categories(async_client: AsyncClient, db_session: AsyncSession):
    """A new category list replaces the old one rather than adding to it."""
    a, b, c = await _create_categories(db_session, "A", "B", "C")
    user_id = await _create_user(async_client)
    post = (await async_client.post("/posts", json={
        "title": "Sets", "userId": user_id, "categories": [a, b],
    })).json()

    resp = await async_client.put(f"/posts/{post['id']}", json={"categories": [b, c]})
    assert resp.status_code == 200
    assert _category_ids(resp.json()) == {b, c}

    resp = await async_client.get(f"/posts/{post['id']}")
    assert _category_ids(resp.json()) == {b, c}


@pytest.mark.asyncio
async def test_update_post_scalar_only_keeps_categories(
    async_client: AsyncClient, db_session: AsyncSession
):
    (tech,) = await _create_categories(db_session, "Tech")
    user_id = await _create_user(async_client)
    post = (await async_client.post("/posts", json={
        "title": "Old", "content": "Body", "userId": user_id, "categories": [tech],
    })).json()

    resp = await async_client.put(f"/posts/{post['id']}", json={"title": "New"})
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["title"] == "New"
    assert updated["content"] == "Body"
    assert _category_ids(updated) == {tech}


@pytest.mark.asyncio
async def test_update_post_ignores_user_id(async_client: AsyncClient):
    """The owner is fixed at creation; userId in a patch has no effect."""
    user_id = await _create_user(async_client)
    other = (await async_client.post("/users", json={"name": "Bob", "email": "bob@example.com"})).json()
    post = (await async_client.post("/posts", json={"title": "Mine", "userId": user_id})).json()

    resp = await async_client.put(f"/posts/{post['id']}", json={"userId": other["id"]})
    assert resp.status_code == 200
    assert resp.json()["userId"] == user_id


@pytest.mark.asyncio
async def test_update_post_not_found(async_client: AsyncClient):
    resp = await async_client.put("/posts/99999", json={"title": "Nope"})
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_post(async_client: AsyncClient, db_session: AsyncSession):
    (tech,) = await _create_categories(db_session, "Tech")
    user_id = await _create_user(async_client)
    post = (await async_client.post("/posts", json={
        "title": "Doomed", "userId": user_id, "categories": [tech],
    })).json()

    resp = await async_client.delete(f"/posts/{post['id']}")
    assert resp.status_code == 200
    assert resp.json() == {
        "id": post["id"], "title": "Doomed", "content": None, "userId": user_id,
    }

    resp = await async_client.get(f"/posts/{post['id']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_post_not_found(async_client: AsyncClient):
    resp = await async_client.delete("/posts/99999")
    assert resp.status_code == 404
