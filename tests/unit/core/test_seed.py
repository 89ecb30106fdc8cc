"""Tests for the sample dataset loader."""

from sunboard.core.repositories import (
    PillarRepository,
    ProjectRepository,
    TaskRepository,
    TeamRepository,
)
from sunboard.seed import seed_database


async def test_seed_populates_catalog(db_session):
    counts = await seed_database(db_session)

    assert counts == {"pillars": 3, "teams": 4, "projects": 4, "tasks": 12}
    assert await PillarRepository(db_session).count() == 3
    assert await TeamRepository(db_session).count() == 4
    assert await ProjectRepository(db_session).count() == 4
    assert await TaskRepository(db_session).count() == 12


async def test_seed_is_idempotent(db_session):
    await seed_database(db_session)
    await seed_database(db_session)

    assert await ProjectRepository(db_session).count() == 4
    assert await TaskRepository(db_session).count() == 12


async def test_seed_sets_progress_from_tasks(db_session):
    await seed_database(db_session)

    projects = ProjectRepository(db_session)
    # One of four tasks completed
    assert (await projects.get_by_slug("unified-data-layer")).progress_percentage == 25
    assert (await projects.get_by_slug("campaign-os")).progress_percentage == 0
