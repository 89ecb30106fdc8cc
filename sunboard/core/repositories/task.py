"""Task repository implementation."""

from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from sunboard.core.models.project import Project
from sunboard.core.models.task import Task
from sunboard.core.repositories.base import BaseRepository
from sunboard.core.schemas.task import TaskCreate, TaskUpdate


class TaskRepository(BaseRepository[Task, TaskCreate, TaskUpdate]):
    """Repository for task data access."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Task)

    async def get_by_project(self, project_id: UUID) -> list[Task]:
        stmt = (
            select(Task)
            .where(Task.project_id == project_id)
            .order_by(Task.order_index, Task.created_at, Task.id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_ordered(self) -> list[Task]:
        stmt = select(Task).order_by(Task.order_index, Task.created_at, Task.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_completion(self, project_id: UUID) -> tuple[int, int]:
        """Return (completed, total) task counts for a project."""
        stmt = select(Task.status, func.count(Task.id)).where(
            Task.project_id == project_id
        ).group_by(Task.status)
        result = await self._session.execute(stmt)
        counts = dict(result.all())
        return counts.get("completed", 0), sum(counts.values())

    async def get_status_counts(self) -> dict[str, int]:
        stmt = select(Task.status, func.count(Task.id)).group_by(Task.status)
        result = await self._session.execute(stmt)
        return dict(result.all())

    async def search(self, term: str, limit: int = 5) -> list[tuple[Task, Project]]:
        """Tasks whose title or description contains ``term``, with their project."""
        stmt = (
            select(Task, Project)
            .join(Project, Task.project_id == Project.id)
            .where(
                or_(
                    Task.title.icontains(term, autoescape=True),
                    Task.description.icontains(term, autoescape=True),
                )
            )
            .order_by(Task.created_at.desc(), Task.id)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [(task, project) for task, project in result.all()]
