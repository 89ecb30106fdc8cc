"""Task API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from sunboard.api.dependencies import get_task_service
from sunboard.core.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from sunboard.core.services import TaskService
from sunboard.utils.exceptions import NotFoundError, TaskNotFoundError

router = APIRouter()


@router.get("/", response_model=list[TaskResponse])
async def list_tasks(
    project_id: str | None = Query(None),
    phase: str | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    difficulty: str | None = Query(None),
    ai_potential: str | None = Query(None),
    owner_team_id: str | None = Query(None),
    search: str | None = Query(None),
    sort_by: str = Query("phase"),
    sort_order: str = Query("asc"),
    task_service: TaskService = Depends(get_task_service),
) -> list[TaskResponse]:
    """List tasks. Defaults to phase order, discovery first."""
    tasks = await task_service.list_tasks(
        filters={
            "project_id": project_id,
            "phase": phase,
            "status": status_filter,
            "difficulty": difficulty,
            "ai_potential": ai_potential,
            "owner_team_id": owner_team_id,
        },
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return [TaskResponse.model_validate(t) for t in tasks]


@router.post("/", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    try:
        task = await task_service.create_task(task_data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return TaskResponse.model_validate(task)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: UUID,
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    try:
        task = await task_service.get_task(task_id)
    except TaskNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found",
        )
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: UUID,
    task_data: TaskUpdate,
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """Update a task. Moving a task to another project is not allowed."""
    try:
        task = await task_service.update_task(task_id, task_data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    task_service: TaskService = Depends(get_task_service),
) -> None:
    try:
        await task_service.delete_task(task_id)
    except TaskNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found",
        )
