"""Dashboard API endpoint."""

from fastapi import APIRouter, Depends

from sunboard.api.dependencies import get_project_service, get_task_repository
from sunboard.core.repositories import TaskRepository
from sunboard.core.services import ProjectService

router = APIRouter()


@router.get("/")
async def get_dashboard(
    project_service: ProjectService = Depends(get_project_service),
    task_repo: TaskRepository = Depends(get_task_repository),
) -> dict:
    """Headline counts and the five most recently updated projects."""
    return await project_service.get_dashboard(await task_repo.get_status_counts())
