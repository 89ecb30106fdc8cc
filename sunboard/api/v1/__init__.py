"""API v1 package."""

from fastapi import APIRouter

from sunboard.api.v1.endpoints import (
    dashboard,
    events,
    pillars,
    projects,
    reviews,
    search,
    tasks,
    teams,
)

# Create the main API router
router = APIRouter(prefix="/api/v1")

# Catalog
router.include_router(pillars.router, prefix="/pillars", tags=["pillars"])
router.include_router(teams.router, prefix="/teams", tags=["teams"])

# Work
router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
router.include_router(search.router, prefix="/search", tags=["search"])

# Reviews
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])

# Activity
router.include_router(events.router, prefix="/events", tags=["events"])
