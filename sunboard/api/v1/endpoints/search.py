"""Global search across projects and tasks."""

from fastapi import APIRouter, Depends, Query

from sunboard.api.dependencies import get_project_repository, get_task_repository
from sunboard.core.repositories import ProjectRepository, TaskRepository

router = APIRouter()

MIN_QUERY_LENGTH = 2
RESULT_LIMIT = 5


@router.get("/")
async def search(
    q: str = Query(default="", max_length=200),
    project_repo: ProjectRepository = Depends(get_project_repository),
    task_repo: TaskRepository = Depends(get_task_repository),
) -> dict:
    """Match title or description, case-insensitively; at most five of each kind.

    Queries shorter than two characters return empty results.
    """
    term = q.strip()
    if len(term) < MIN_QUERY_LENGTH:
        return {"projects": [], "tasks": []}

    projects = await project_repo.search(term, limit=RESULT_LIMIT)
    tasks = await task_repo.search(term, limit=RESULT_LIMIT)
    return {
        "projects": [
            {
                "id": str(p.id),
                "title": p.title,
                "slug": p.slug,
                "status": p.status,
                "priority": p.priority,
            }
            for p in projects
        ],
        "tasks": [
            {
                "id": str(t.id),
                "title": t.title,
                "status": t.status,
                "phase": t.phase,
                "project": {"id": str(p.id), "title": p.title, "slug": p.slug},
            }
            for t, p in tasks
        ],
    }
