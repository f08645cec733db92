"""Service test fixtures: async DB + FastAPI test client + signed-in users.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - alice/bob are registered through the real /register + /login routes

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - db_manager patched so readiness probes see the test engine
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import app.infrastructure.database as db_module
import app.models  # noqa: F401
from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _sign_up(client, username: str) -> dict:
    password = f"{username}-password"
    res = await client.post("/api/v1/users/register", json={
        "username": username,
        "email": f"{username}@example.com",
        "password": password,
    })
    assert res.status_code == 201, res.text
    res = await client.post("/api/v1/users/login", json={
        "identifier": username, "password": password,
    })
    assert res.status_code == 200, res.text
    body = res.json()
    return {
        "id": body["user"]["id"],
        "username": username,
        "password": password,
        "token": body["token"],
        "headers": {"Authorization": f"Bearer {body['token']}"},
    }


@pytest.fixture
async def alice(client):
    return await _sign_up(client, "alice")


@pytest.fixture
async def bob(client):
    return await _sign_up(client, "bob")


@pytest.fixture
async def category(client, alice):
    res = await client.post(
        "/api/v1/categories",
        json={"name": "Tech", "description": "All things tech"},
        headers=alice["headers"],
    )
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture
def make_post(client, alice, category):
    """Factory: create a post as `author` (default alice), return its JSON."""
    async def _make(author=None, **overrides):
        author = author or alice
        body = {
            "title": "Hello world",
            "content": "A post body long enough to pass.",
            "category": category["id"],
            "is_published": True,
        }
        body.update(overrides)
        res = await client.post(
            "/api/v1/posts", json=body, headers=author["headers"],
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _make
