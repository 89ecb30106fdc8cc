"""Project API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from sunboard.api.dependencies import get_project_service
from sunboard.core.schemas.project import (
    ProjectCreate,
    ProjectDetail,
    ProjectResponse,
    ProjectUpdate,
)
from sunboard.core.services import ProjectService
from sunboard.utils.exceptions import NotFoundError, ProjectNotFoundError

router = APIRouter()


@router.get("/", response_model=list[ProjectResponse])
async def list_projects(
    status_filter: str | None = Query(None, alias="status"),
    priority: str | None = Query(None),
    difficulty: str | None = Query(None),
    pillar_id: str | None = Query(None),
    owner_team_id: str | None = Query(None),
    category: str | None = Query(None),
    search: str | None = Query(None),
    sort_by: str = Query("created_at"),
    sort_order: str = Query("desc"),
    include_archived: bool = Query(False),
    time_horizon: str | None = Query(None),
    task_list_quality: str | None = Query(None),
    pain_point_level: str | None = Query(None),
    adoption_risk: str | None = Query(None),
    roi_confidence: str | None = Query(None),
    strategic_alignment: str | None = Query(None),
    resource_justified: str | None = Query(None),
    timeline_realistic: str | None = Query(None),
    tech_debt_risk: str | None = Query(None),
    data_readiness: str | None = Query(None),
    project_service: ProjectService = Depends(get_project_service),
) -> list[ProjectResponse]:
    """List projects.

    Every filter accepts ``all`` to mean no constraint. Unknown ``sort_by``
    keys are rejected with 422.
    """
    filters = {
        "status": status_filter,
        "priority": priority,
        "difficulty": difficulty,
        "pillar_id": pillar_id,
        "owner_team_id": owner_team_id,
        "category": category,
        "time_horizon": time_horizon,
        "task_list_quality": task_list_quality,
        "pain_point_level": pain_point_level,
        "adoption_risk": adoption_risk,
        "roi_confidence": roi_confidence,
        "strategic_alignment": strategic_alignment,
        "resource_justified": resource_justified,
        "timeline_realistic": timeline_realistic,
        "tech_debt_risk": tech_debt_risk,
        "data_readiness": data_readiness,
    }
    return await project_service.list_projects(
        filters=filters,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        include_archived=include_archived,
    )


@router.post("/", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    """Create a new project. The slug defaults to one derived from the title."""
    try:
        return await project_service.create_project(project_data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{id_or_slug}", response_model=ProjectDetail)
async def get_project(
    id_or_slug: str,
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectDetail:
    """Get a project by id or slug, with its tasks and review status."""
    try:
        return await project_service.get_project(id_or_slug)
    except ProjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {id_or_slug} not found",
        )


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    project_data: ProjectUpdate,
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    try:
        return await project_service.update_project(project_id, project_data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    project_service: ProjectService = Depends(get_project_service),
) -> None:
    """Delete a project with its tasks and review history."""
    try:
        await project_service.delete_project(project_id)
    except ProjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        )
