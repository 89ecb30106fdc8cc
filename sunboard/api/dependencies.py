"""API dependency injection."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sunboard.core.database import get_db_session
from sunboard.core.repositories import (
    PillarRepository,
    ProjectRepository,
    ReviewCommentRepository,
    ReviewFeedbackRepository,
    ReviewSessionRepository,
    TaskRepository,
    TeamRepository,
)
from sunboard.core.services import EventBus, ProjectService, ReviewService, TaskService
from sunboard.core.services import event_bus as default_event_bus


# Repository dependencies
def get_pillar_repository(
    session: AsyncSession = Depends(get_db_session),
) -> PillarRepository:
    """Get pillar repository."""
    return PillarRepository(session)


def get_team_repository(
    session: AsyncSession = Depends(get_db_session),
) -> TeamRepository:
    """Get team repository."""
    return TeamRepository(session)


def get_project_repository(
    session: AsyncSession = Depends(get_db_session),
) -> ProjectRepository:
    """Get project repository."""
    return ProjectRepository(session)


def get_task_repository(
    session: AsyncSession = Depends(get_db_session),
) -> TaskRepository:
    """Get task repository."""
    return TaskRepository(session)


def get_review_session_repository(
    session: AsyncSession = Depends(get_db_session),
) -> ReviewSessionRepository:
    """Get review session repository."""
    return ReviewSessionRepository(session)


def get_event_bus() -> EventBus:
    """Get the process-wide event bus (overridden in tests)."""
    return default_event_bus


# Service dependencies
def get_project_service(
    project_repo: ProjectRepository = Depends(get_project_repository),
    pillar_repo: PillarRepository = Depends(get_pillar_repository),
    team_repo: TeamRepository = Depends(get_team_repository),
    session_repo: ReviewSessionRepository = Depends(get_review_session_repository),
    events: EventBus = Depends(get_event_bus),
) -> ProjectService:
    """Get project service."""
    return ProjectService(project_repo, pillar_repo, team_repo, session_repo, events)


def get_task_service(
    task_repo: TaskRepository = Depends(get_task_repository),
    project_repo: ProjectRepository = Depends(get_project_repository),
    team_repo: TeamRepository = Depends(get_team_repository),
    events: EventBus = Depends(get_event_bus),
) -> TaskService:
    """Get task service."""
    return TaskService(task_repo, project_repo, team_repo, events)


def get_review_service(
    session: AsyncSession = Depends(get_db_session),
    events: EventBus = Depends(get_event_bus),
) -> ReviewService:
    """Get review service."""
    return ReviewService(
        ReviewSessionRepository(session),
        ReviewFeedbackRepository(session),
        ReviewCommentRepository(session),
        ProjectRepository(session),
        TaskRepository(session),
        events,
    )
