"""API tests for pillars, teams, the dashboard, events and app middleware."""

import httpx
import pytest
from fastapi import FastAPI

from sunboard.api.middleware import RateLimitMiddleware
from sunboard.main import _validate_production_env
from sunboard.utils.config import Settings, get_settings


# --- Pillars and teams ---


async def test_pillar_crud(client):
    resp = await client.post(
        "/api/v1/pillars/",
        json={"name": "Data Foundation", "slug": "data-foundation", "order_index": 1},
    )
    assert resp.status_code == 201
    pillar = resp.json()
    assert pillar["color"] == "#6366F1"

    await client.post("/api/v1/pillars/", json={"name": "Insight", "slug": "insight"})
    listed = (await client.get("/api/v1/pillars/")).json()
    assert [p["slug"] for p in listed] == ["insight", "data-foundation"]

    resp = await client.patch(f"/api/v1/pillars/{pillar['id']}", json={"color": "#000000"})
    assert resp.json()["color"] == "#000000"

    assert (await client.delete(f"/api/v1/pillars/{pillar['id']}")).status_code == 204
    assert (await client.get(f"/api/v1/pillars/{pillar['id']}")).status_code == 404


async def test_pillar_duplicate_slug_conflicts(client):
    body = {"name": "Data Foundation", "slug": "data-foundation"}
    assert (await client.post("/api/v1/pillars/", json=body)).status_code == 201
    assert (await client.post("/api/v1/pillars/", json=body)).status_code == 409


async def test_pillar_slug_must_be_kebab_case(client):
    resp = await client.post("/api/v1/pillars/", json={"name": "Bad", "slug": "Bad Slug"})
    assert resp.status_code == 422


async def test_team_crud(client):
    resp = await client.post("/api/v1/teams/", json={"name": "Sales", "slug": "sales"})
    assert resp.status_code == 201
    team = resp.json()

    assert (await client.get(f"/api/v1/teams/{team['id']}")).json()["name"] == "Sales"
    resp = await client.patch(f"/api/v1/teams/{team['id']}", json={"name": "Inside Sales"})
    assert resp.json()["name"] == "Inside Sales"
    assert (await client.delete(f"/api/v1/teams/{team['id']}")).status_code == 204
    assert (await client.delete(f"/api/v1/teams/{team['id']}")).status_code == 404


async def test_project_links_to_pillar_and_team(client, make_project):
    pillar = (
        await client.post("/api/v1/pillars/", json={"name": "Data", "slug": "data"})
    ).json()
    team = (await client.post("/api/v1/teams/", json={"name": "Tech", "slug": "tech"})).json()

    project = await make_project("Linked", pillar_id=pillar["id"], owner_team_id=team["id"])

    detail = (await client.get(f"/api/v1/projects/{project['id']}")).json()
    assert detail["pillar_id"] == pillar["id"]
    assert detail["owner_team_id"] == team["id"]

    filtered = (await client.get("/api/v1/projects/", params={"pillar_id": pillar["id"]})).json()
    assert [p["id"] for p in filtered] == [project["id"]]


# --- Dashboard ---


async def test_dashboard_counts(client, make_project, make_task):
    active = await make_project("Active", status="in_progress")
    await make_project("Idea")
    archived = await make_project("Old")
    await client.patch(f"/api/v1/projects/{archived['id']}", json={"is_archived": True})

    await make_task(active["id"], "Done", status="completed")
    await make_task(active["id"], "Stuck", status="blocked")
    await make_task(active["id"], "Open")

    data = (await client.get("/api/v1/dashboard/")).json()

    assert data["stats"] == {
        "totalProjects": 2,
        "activeProjects": 1,
        "totalTasks": 3,
        "completedTasks": 1,
        "blockedTasks": 1,
    }
    assert {p["title"] for p in data["recentProjects"]} == {"Active", "Idea"}


async def test_dashboard_empty(client):
    data = (await client.get("/api/v1/dashboard/")).json()
    assert data["stats"]["totalProjects"] == 0
    assert data["recentProjects"] == []


# --- Events ---


async def test_events_endpoint_lists_published_events(client, bus):
    await bus.publish("project.created", {"id": "p1"})
    await bus.publish("project.updated", {"id": "p1"})

    data = (await client.get("/api/v1/events/")).json()
    assert data["count"] == 2
    assert [e["type"] for e in data["events"]] == ["project.created", "project.updated"]

    since = data["events"][0]["timestamp"]
    newer = (await client.get("/api/v1/events/", params={"since": since})).json()
    assert [e["type"] for e in newer["events"]] == ["project.updated"]

    stats = (await client.get("/api/v1/events/stats")).json()
    assert stats["buffer_size"] == 2


# --- App ---


async def test_root_and_health(client):
    assert (await client.get("/health")).json() == {"status": "healthy"}
    assert (await client.get("/")).json()["message"] == "Sunboard API"


async def test_api_key_required_when_configured(monkeypatch, database):
    monkeypatch.setenv("SUNBOARD_API_KEY", "s3cret")
    get_settings.cache_clear()
    from sunboard.main import create_app

    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        assert (await ac.get("/health")).status_code == 200
        assert (await ac.get("/api/v1/pillars/")).status_code == 401
        assert (
            await ac.get("/api/v1/pillars/", headers={"X-API-Key": "wrong"})
        ).status_code == 401
        assert (
            await ac.get("/api/v1/pillars/", headers={"Authorization": "Bearer s3cret"})
        ).status_code == 200
        assert (
            await ac.get("/api/v1/pillars/", headers={"X-API-Key": "s3cret"})
        ).status_code == 200


async def test_rate_limit_uses_stricter_budget_for_review_writes():
    app = FastAPI()

    @app.get("/api/v1/projects/")
    async def projects():
        return []

    @app.post("/api/v1/reviews/feedback")
    async def feedback():
        return {}

    app.add_middleware(RateLimitMiddleware, default_limit=3, strict_limit=1)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        assert (await ac.post("/api/v1/reviews/feedback")).status_code == 200
        limited = await ac.post("/api/v1/reviews/feedback")
        assert limited.status_code == 429
        assert int(limited.headers["Retry-After"]) >= 1

        # Read traffic has its own window
        for _ in range(3):
            assert (await ac.get("/api/v1/projects/")).status_code == 200
        assert (await ac.get("/api/v1/projects/")).status_code == 429


def test_production_requires_api_key_and_postgres():
    with pytest.raises(SystemExit):
        _validate_production_env(Settings(environment="production"))

    _validate_production_env(
        Settings(
            environment="production",
            database={"url": "postgresql+asyncpg://db/sunboard"},
            security={"api_key": "s3cret"},
        )
    )
