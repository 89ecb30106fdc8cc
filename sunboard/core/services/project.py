"""Project service: listing, detail, CRUD and dashboard stats."""

import logging
import re
from uuid import UUID

from sunboard.core.models.project import Project
from sunboard.core.repositories.catalog import PillarRepository, TeamRepository
from sunboard.core.repositories.project import ProjectRepository
from sunboard.core.repositories.review import ReviewSessionRepository
from sunboard.core.schemas.project import (
    ProjectCreate,
    ProjectDetail,
    ProjectResponse,
    ProjectUpdate,
    ReviewStatus,
)
from sunboard.core.services.event_bus import EventBus, event_bus
from sunboard.core.services.query_engine import RecordKind, apply_query, validate_sort
from sunboard.utils.exceptions import (
    ConflictError,
    PillarNotFoundError,
    ProjectNotFoundError,
    TeamNotFoundError,
)

logger = logging.getLogger(__name__)


def slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or "project"


def build_review_status(sessions) -> ReviewStatus:
    """Summarize completed sessions of one project into per-area flags."""
    completed = [s for s in sessions if s.status == "completed"]
    areas = {s.reviewer_area for s in completed}
    return ReviewStatus(
        management_reviewed="management" in areas,
        operations_sales_reviewed="operations_sales" in areas,
        product_tech_reviewed="product_tech" in areas,
        review_count=len(completed),
    )


class ProjectService:
    """Service for project operations."""

    def __init__(
        self,
        project_repository: ProjectRepository,
        pillar_repository: PillarRepository,
        team_repository: TeamRepository,
        session_repository: ReviewSessionRepository,
        events: EventBus = event_bus,
    ) -> None:
        self._project_repository = project_repository
        self._pillar_repository = pillar_repository
        self._team_repository = team_repository
        self._session_repository = session_repository
        self._events = events

    async def _check_references(
        self, pillar_id: UUID | None, owner_team_id: UUID | None
    ) -> None:
        if pillar_id is not None and not await self._pillar_repository.exists(pillar_id):
            raise PillarNotFoundError(pillar_id)
        if owner_team_id is not None and not await self._team_repository.exists(owner_team_id):
            raise TeamNotFoundError(owner_team_id)

    def _to_response(self, project: Project, task_count: int = 0) -> ProjectResponse:
        response = ProjectResponse.model_validate(project)
        response.task_count = task_count
        return response

    async def list_projects(
        self,
        filters: dict | None = None,
        search: str | None = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        include_archived: bool = False,
    ) -> list[ProjectResponse]:
        """List projects through the query engine."""
        validate_sort(RecordKind.PROJECT, sort_by, sort_order)
        projects = await self._project_repository.get_active(include_archived=include_archived)
        counts = await self._project_repository.get_task_counts()
        selected = apply_query(
            projects,
            RecordKind.PROJECT,
            filters=filters,
            sort_key=sort_by,
            direction=sort_order,
            search=search,
        )
        return [self._to_response(p, counts.get(p.id, 0)) for p in selected]

    async def get_project(self, id_or_slug: str) -> ProjectDetail:
        """Get a project by UUID or slug, with its tasks and review status."""
        project = None
        try:
            project_id = UUID(str(id_or_slug))
        except ValueError:
            found = await self._project_repository.get_by_slug(id_or_slug)
            project_id = found.id if found else None
        if project_id is not None:
            project = await self._project_repository.get_with_tasks(project_id)
        if not project:
            raise ProjectNotFoundError(id_or_slug)

        detail = ProjectDetail.model_validate(project)
        detail.task_count = len(detail.tasks)
        sessions = await self._session_repository.get_by_project(project.id)
        detail.review_status = build_review_status(sessions)
        return detail

    async def create_project(self, project_data: ProjectCreate) -> ProjectResponse:
        await self._check_references(project_data.pillar_id, project_data.owner_team_id)
        slug = project_data.slug or slugify(project_data.title)
        if await self._project_repository.get_by_slug(slug):
            raise ConflictError(f"A project with slug '{slug}' already exists")

        project = await self._project_repository.create(project_data, slug=slug)
        logger.info("Created project %s (%s)", project.slug, project.id)
        await self._events.publish(
            "project.created", {"id": str(project.id), "title": project.title}
        )
        return self._to_response(project)

    async def update_project(self, project_id: UUID, project_data: ProjectUpdate) -> ProjectResponse:
        fields = project_data.model_fields_set
        await self._check_references(
            project_data.pillar_id if "pillar_id" in fields else None,
            project_data.owner_team_id if "owner_team_id" in fields else None,
        )
        project = await self._project_repository.update(project_id, project_data)
        if not project:
            raise ProjectNotFoundError(project_id)

        await self._events.publish(
            "project.updated",
            {"id": str(project.id), "fields": sorted(fields)},
        )
        counts = await self._project_repository.get_task_counts()
        return self._to_response(project, counts.get(project.id, 0))

    async def delete_project(self, project_id: UUID) -> None:
        if not await self._project_repository.delete(project_id):
            raise ProjectNotFoundError(project_id)
        logger.info("Deleted project %s", project_id)

    async def get_dashboard(self, task_status_counts: dict[str, int]) -> dict:
        """Headline counts plus the five most recently updated projects."""
        projects = await self._project_repository.get_active()
        recent = await self._project_repository.get_recently_updated(limit=5)
        return {
            "stats": {
                "totalProjects": len(projects),
                "activeProjects": sum(1 for p in projects if p.status == "in_progress"),
                "totalTasks": sum(task_status_counts.values()),
                "completedTasks": task_status_counts.get("completed", 0),
                "blockedTasks": task_status_counts.get("blocked", 0),
            },
            "recentProjects": [
                self._to_response(p).model_dump(mode="json") for p in recent
            ],
        }
