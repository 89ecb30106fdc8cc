"""Shared fixtures: isolated settings, an in-memory database and an API client."""

import httpx
import pytest

from sunboard.api.dependencies import get_event_bus
from sunboard.core.database import (
    configure_engine,
    dispose_engine,
    get_session_factory,
    init_database,
)
from sunboard.core.services.event_bus import EventBus
from sunboard.utils.config import get_settings

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep the developer's environment out of the tests."""
    for name in ("SUNBOARD_ENV", "SUNBOARD_API_KEY", "DATABASE_URL", "SUNBOARD_API_URL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
async def database():
    """Fresh in-memory schema per test."""
    configure_engine(TEST_DATABASE_URL)
    await init_database()
    yield
    await dispose_engine()


@pytest.fixture
async def db_session(database):
    async with get_session_factory()() as session:
        yield session


@pytest.fixture
async def client(database, bus):
    """httpx client talking to the app in-process."""
    from sunboard.main import create_app

    app = create_app()
    app.dependency_overrides[get_event_bus] = lambda: bus
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def make_project(client):
    """Create a project through the API and return its JSON."""

    async def _make(title: str, **fields) -> dict:
        resp = await client.post("/api/v1/projects/", json={"title": title, **fields})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
async def make_task(client):
    async def _make(project_id: str, title: str, **fields) -> dict:
        resp = await client.post(
            "/api/v1/tasks/", json={"project_id": project_id, "title": title, **fields}
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
