"""Project repository implementation."""

from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from sunboard.core.models.project import Project
from sunboard.core.models.task import Task
from sunboard.core.repositories.base import BaseRepository, SlugRepositoryMixin
from sunboard.core.schemas.project import ProjectCreate, ProjectUpdate


class ProjectRepository(
    SlugRepositoryMixin, BaseRepository[Project, ProjectCreate, ProjectUpdate]
):
    """Repository for project data access."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Project)

    async def get_active(self, include_archived: bool = False) -> list[Project]:
        """Projects in the server-determined order: newest first, then id."""
        stmt = select(Project).order_by(Project.created_at.desc(), Project.id)
        if not include_archived:
            stmt = stmt.where(Project.is_archived.is_(False))
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_with_tasks(self, id: UUID) -> Project | None:
        stmt = select(Project).options(selectinload(Project.tasks)).where(Project.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_task_counts(self) -> dict[UUID, int]:
        stmt = select(Task.project_id, func.count(Task.id)).group_by(Task.project_id)
        result = await self._session.execute(stmt)
        return {project_id: count for project_id, count in result.all()}

    async def get_recently_updated(self, limit: int = 5) -> list[Project]:
        stmt = (
            select(Project)
            .where(Project.is_archived.is_(False))
            .order_by(Project.updated_at.desc(), Project.id)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def set_progress(self, id: UUID, progress: int) -> None:
        project = await self.get_by_id(id)
        if project is not None and project.progress_percentage != progress:
            project.progress_percentage = progress
            await self._commit()

    async def search(self, term: str, limit: int = 5) -> list[Project]:
        """Case-insensitive substring match on title or description."""
        stmt = (
            select(Project)
            .where(
                or_(
                    Project.title.icontains(term, autoescape=True),
                    Project.description.icontains(term, autoescape=True),
                )
            )
            .order_by(Project.created_at.desc(), Project.id)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
