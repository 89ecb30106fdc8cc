"""Task service."""

import logging
from uuid import UUID

from sunboard.core.models.task import Task
from sunboard.core.repositories.catalog import TeamRepository
from sunboard.core.repositories.project import ProjectRepository
from sunboard.core.repositories.task import TaskRepository
from sunboard.core.schemas.task import TaskCreate, TaskUpdate
from sunboard.core.services.event_bus import EventBus, event_bus
from sunboard.core.services.query_engine import RecordKind, apply_query, validate_sort
from sunboard.utils.exceptions import ProjectNotFoundError, TaskNotFoundError, TeamNotFoundError

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task operations.

    Keeps each project's ``progress_percentage`` equal to the rounded share
    of its tasks that are completed.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        project_repository: ProjectRepository,
        team_repository: TeamRepository,
        events: EventBus = event_bus,
    ) -> None:
        self._task_repository = task_repository
        self._project_repository = project_repository
        self._team_repository = team_repository
        self._events = events

    async def _refresh_progress(self, project_id: UUID) -> None:
        completed, total = await self._task_repository.get_completion(project_id)
        progress = round(completed * 100 / total) if total else 0
        await self._project_repository.set_progress(project_id, progress)

    async def list_tasks(
        self,
        filters: dict | None = None,
        search: str | None = None,
        sort_by: str = "phase",
        sort_order: str = "asc",
    ) -> list[Task]:
        validate_sort(RecordKind.TASK, sort_by, sort_order)
        tasks = await self._task_repository.get_ordered()
        return apply_query(
            tasks,
            RecordKind.TASK,
            filters=filters,
            sort_key=sort_by,
            direction=sort_order,
            search=search,
        )

    async def get_task(self, task_id: UUID) -> Task:
        task = await self._task_repository.get_by_id(task_id)
        if not task:
            raise TaskNotFoundError(task_id)
        return task

    async def create_task(self, task_data: TaskCreate) -> Task:
        if not await self._project_repository.exists(task_data.project_id):
            raise ProjectNotFoundError(task_data.project_id)
        if task_data.owner_team_id and not await self._team_repository.exists(
            task_data.owner_team_id
        ):
            raise TeamNotFoundError(task_data.owner_team_id)

        task = await self._task_repository.create(task_data)
        await self._refresh_progress(task.project_id)
        await self._events.publish(
            "task.created",
            {"id": str(task.id), "project_id": str(task.project_id), "title": task.title},
        )
        return task

    async def update_task(self, task_id: UUID, task_data: TaskUpdate) -> Task:
        if task_data.owner_team_id and not await self._team_repository.exists(
            task_data.owner_team_id
        ):
            raise TeamNotFoundError(task_data.owner_team_id)

        task = await self._task_repository.update(task_id, task_data)
        if not task:
            raise TaskNotFoundError(task_id)

        if "status" in task_data.model_fields_set:
            await self._refresh_progress(task.project_id)
        await self._events.publish(
            "task.updated",
            {"id": str(task.id), "fields": sorted(task_data.model_fields_set)},
        )
        return task

    async def delete_task(self, task_id: UUID) -> None:
        task = await self.get_task(task_id)
        project_id = task.project_id
        await self._task_repository.delete(task_id)
        await self._refresh_progress(project_id)
