"""Review workflow service.

Sessions follow ``no_session -> in_progress -> completed`` per
(reviewer, project, area). Starting a review is find-or-create, so reopening
a project in a second tab resumes the open session instead of inserting a
duplicate. Completion is declared by the reviewer; unanswered questions never
block it.
"""

import logging
from collections import defaultdict
from uuid import UUID

from sunboard.core.models.review import ReviewComment, ReviewFeedback, ReviewSession
from sunboard.core.repositories.project import ProjectRepository
from sunboard.core.repositories.review import (
    ReviewCommentRepository,
    ReviewFeedbackRepository,
    ReviewSessionRepository,
)
from sunboard.core.repositories.task import TaskRepository
from sunboard.core.schemas.project import ProjectResponse
from sunboard.core.schemas.review import (
    FeedbackCreate,
    FeedbackResponse,
    ReviewCommentCreate,
    ReviewCommentResponse,
    ReviewSessionCreate,
    ReviewSessionResponse,
)
from sunboard.core.schemas.task import TaskResponse
from sunboard.core.services.event_bus import EventBus, event_bus
from sunboard.core.services.project import build_review_status
from sunboard.core.vocabulary import REVIEWER_AREA
from sunboard.review.questions import find_question
from sunboard.utils.exceptions import (
    ConflictError,
    FeedbackNotFoundError,
    ProjectNotFoundError,
    ReviewSessionNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _percent(part: int, whole: int) -> int:
    return round(part * 100 / whole) if whole else 0


class ReviewService:
    """Service for review sessions, feedback and comments."""

    def __init__(
        self,
        session_repository: ReviewSessionRepository,
        feedback_repository: ReviewFeedbackRepository,
        comment_repository: ReviewCommentRepository,
        project_repository: ProjectRepository,
        task_repository: TaskRepository,
        events: EventBus = event_bus,
    ) -> None:
        self._sessions = session_repository
        self._feedback = feedback_repository
        self._comments = comment_repository
        self._projects = project_repository
        self._tasks = task_repository
        self._events = events

    # --- Sessions ---

    async def get_session(self, session_id: UUID) -> ReviewSession:
        review_session = await self._sessions.get_by_id(session_id)
        if not review_session:
            raise ReviewSessionNotFoundError(session_id)
        return review_session

    async def start_session(self, data: ReviewSessionCreate) -> tuple[ReviewSession, bool]:
        """Find or create the session for (reviewer, project, area).

        Returns the session and whether it was newly created. An open session
        is reused; a completed one is returned unchanged rather than reopened.
        """
        if not await self._projects.exists(data.project_id):
            raise ProjectNotFoundError(data.project_id)

        existing = await self._sessions.get_open(
            data.reviewer_id, data.project_id, data.reviewer_area
        )
        if existing:
            logger.info(
                "Resuming review session %s",
                existing.id,
                extra={"session_id": existing.id, "reviewer_id": data.reviewer_id},
            )
            return existing, False

        completed = await self._sessions.get_latest_completed(
            data.reviewer_id, data.project_id, data.reviewer_area
        )
        if completed:
            return completed, False

        try:
            review_session = await self._sessions.create(data)
        except ConflictError:
            # Another request opened the same session between our read and insert
            existing = await self._sessions.get_open(
                data.reviewer_id, data.project_id, data.reviewer_area
            )
            if existing is None:
                raise
            return existing, False

        logger.info(
            "Started review session %s",
            review_session.id,
            extra={
                "session_id": review_session.id,
                "reviewer_id": data.reviewer_id,
                "reviewer_area": data.reviewer_area,
                "project_id": data.project_id,
            },
        )
        await self._events.publish(
            "review.started",
            {
                "id": str(review_session.id),
                "project_id": str(data.project_id),
                "reviewer_area": data.reviewer_area,
            },
        )
        return review_session, True

    async def complete_session(self, session_id: UUID) -> ReviewSession:
        """Mark a session completed, however many questions were answered."""
        review_session = await self.get_session(session_id)
        if review_session.status == "completed":
            return review_session

        review_session = await self._sessions.mark_completed(review_session)
        logger.info(
            "Completed review session %s",
            review_session.id,
            extra={"session_id": review_session.id, "project_id": review_session.project_id},
        )
        await self._events.publish(
            "review.completed",
            {
                "id": str(review_session.id),
                "project_id": str(review_session.project_id),
                "reviewer_area": review_session.reviewer_area,
            },
        )
        return review_session

    # --- Feedback ---

    async def submit_feedback(self, data: FeedbackCreate) -> tuple[ReviewFeedback, bool]:
        """Upsert the answer for (session, field_name); the last write wins.

        Returns the stored row and whether it was newly created.
        """
        review_session = await self.get_session(data.review_session_id)
        question = find_question(review_session.reviewer_area, data.field_name)
        if question is not None and data.proposed_value is not None:
            question.validate_answer(data.proposed_value)

        existing = await self._feedback.get_by_field(data.review_session_id, data.field_name)
        if existing:
            return await self._feedback.overwrite(existing, data), False

        try:
            feedback = await self._feedback.create(data)
        except ConflictError:
            existing = await self._feedback.get_by_field(
                data.review_session_id, data.field_name
            )
            if existing is None:
                raise
            return await self._feedback.overwrite(existing, data), False

        await self._events.publish(
            "review.feedback",
            {"session_id": str(data.review_session_id), "field_name": data.field_name},
        )
        return feedback, True

    async def list_feedback(
        self, session_id: UUID | None = None, project_id: UUID | None = None
    ) -> list[ReviewFeedback]:
        return await self._feedback.get_by_sessions(
            await self._session_ids(session_id, project_id)
        )

    async def delete_feedback(self, feedback_id: UUID) -> None:
        if not await self._feedback.delete(feedback_id):
            raise FeedbackNotFoundError(feedback_id)

    # --- Comments ---

    async def add_comment(self, data: ReviewCommentCreate) -> ReviewComment:
        """Append a comment to a session, optionally about one task."""
        review_session = await self.get_session(data.review_session_id)
        if review_session.project_id != data.project_id:
            raise ValidationError("Comment project does not match the review session's project")

        content = data.content.strip()
        if not content:
            raise ValidationError("Comment content must not be blank")

        if data.task_id is not None:
            task = await self._tasks.get_by_id(data.task_id)
            if task is None or task.project_id != data.project_id:
                raise ValidationError(f"Task {data.task_id} does not belong to this project")

        comment = await self._comments.create(data, content=content)
        await self._events.publish(
            "review.comment",
            {"session_id": str(data.review_session_id), "project_id": str(data.project_id)},
        )
        return comment

    async def list_comments(
        self, session_id: UUID | None = None, project_id: UUID | None = None
    ) -> list[ReviewComment]:
        return await self._comments.get_by_sessions(
            await self._session_ids(session_id, project_id)
        )

    async def _session_ids(self, session_id: UUID | None, project_id: UUID | None) -> list[UUID]:
        if project_id is not None:
            return [s.id for s in await self._sessions.get_by_project(project_id)]
        if session_id is not None:
            return [session_id]
        raise ValidationError("review_session_id or project_id is required")

    # --- Queue and progress ---

    async def get_pending(self, reviewer_id: str, reviewer_area: str | None = None) -> dict:
        """Projects split into pending and completed for one reviewer.

        Order is the server's stable project order (newest first, then id),
        so Previous/Next navigation stays consistent between fetches.
        """
        if reviewer_area is not None:
            REVIEWER_AREA.validate(reviewer_area)

        projects = await self._projects.get_active()
        tasks = await self._tasks.get_ordered()
        completed_sessions = await self._sessions.get_completed()
        mine = await self._sessions.get_for_reviewer(reviewer_id, reviewer_area)

        tasks_by_project = defaultdict(list)
        for task in tasks:
            tasks_by_project[task.project_id].append(task)

        sessions_by_project = defaultdict(list)
        for review_session in completed_sessions:
            sessions_by_project[review_session.project_id].append(review_session)

        my_sessions: dict[UUID, ReviewSession] = {}
        for review_session in mine:
            current = my_sessions.get(review_session.project_id)
            # A completed session outranks an open one
            if current is None or current.status != "completed":
                my_sessions[review_session.project_id] = review_session

        enriched = []
        for project in projects:
            project_tasks = tasks_by_project.get(project.id, [])
            session = my_sessions.get(project.id)
            data = ProjectResponse.model_validate(project).model_dump(mode="json")
            data["task_count"] = len(project_tasks)
            data["tasks"] = [
                TaskResponse.model_validate(t).model_dump(mode="json") for t in project_tasks
            ]
            data["review_status"] = build_review_status(
                sessions_by_project.get(project.id, [])
            ).model_dump()
            data["my_review_session"] = (
                ReviewSessionResponse.model_validate(session).model_dump(mode="json")
                if session
                else None
            )
            data["is_reviewed_by_me"] = bool(session and session.status == "completed")
            enriched.append(data)

        pending = [p for p in enriched if not p["is_reviewed_by_me"]]
        completed = [p for p in enriched if p["is_reviewed_by_me"]]

        return {
            "projects": enriched,
            "pendingReview": pending,
            "completedReview": completed,
            "stats": {
                "totalProjects": len(enriched),
                "reviewedProjects": len(completed),
                "pendingProjects": len(pending),
                "progress": _percent(len(completed), len(enriched)),
            },
        }

    async def get_progress(
        self, reviewer_id: str | None = None, reviewer_area: str | None = None
    ) -> dict:
        """Overall review coverage plus stats for one reviewer."""
        projects = await self._projects.get_active()
        completed_sessions = await self._sessions.get_completed()

        sessions_by_project = defaultdict(list)
        for review_session in completed_sessions:
            sessions_by_project[review_session.project_id].append(review_session)
        statuses = [build_review_status(sessions_by_project.get(p.id, [])) for p in projects]

        fully = sum(1 for s in statuses if s.all_reviewed)
        partially = sum(
            1
            for s in statuses
            if not s.all_reviewed
            and (s.management_reviewed or s.operations_sales_reviewed or s.product_tech_reviewed)
        )

        reviewer = {
            "completedReviews": 0,
            "inProgressReviews": 0,
            "feedbackCount": 0,
            "commentCount": 0,
        }
        reviewed_projects: set[UUID] = set()
        if reviewer_id:
            mine = await self._sessions.get_for_reviewer(reviewer_id, reviewer_area)
            session_ids = [s.id for s in mine]
            reviewer["completedReviews"] = sum(1 for s in mine if s.status == "completed")
            reviewer["inProgressReviews"] = sum(1 for s in mine if s.status == "in_progress")
            reviewer["feedbackCount"] = await self._feedback.count_by_sessions(session_ids)
            reviewer["commentCount"] = await self._comments.count_by_sessions(session_ids)
            active_ids = {p.id for p in projects}
            reviewed_projects = {
                s.project_id for s in mine if s.status == "completed" and s.project_id in active_ids
            }

        return {
            "totalProjects": len(projects),
            "fullyReviewed": fully,
            "partiallyReviewed": partially,
            "notReviewed": len(projects) - fully - partially,
            "byArea": {
                "management": sum(1 for s in statuses if s.management_reviewed),
                "operations_sales": sum(1 for s in statuses if s.operations_sales_reviewed),
                "product_tech": sum(1 for s in statuses if s.product_tech_reviewed),
            },
            "reviewer": reviewer,
            "progress": _percent(len(reviewed_projects), len(projects)),
        }

    async def get_admin_overview(self, recent_limit: int = 20) -> dict:
        """Coverage across all reviewers: per-reviewer, per-area and per-field totals.

        Only non-archived projects count toward coverage; feedback and comment
        totals include every session.
        """
        projects = await self._projects.get_active()
        active_ids = {p.id for p in projects}
        sessions = await self._sessions.get_all()
        feedback_per_session = await self._feedback.count_per_session()
        comments_per_session = await self._comments.count_per_session()

        completed_by_project = defaultdict(list)
        reviewed_by_reviewer: dict[str, set[UUID]] = defaultdict(set)
        reviewers: dict[str, dict] = {}
        for review_session in sessions:
            stats = reviewers.setdefault(
                review_session.reviewer_id,
                {"totalFeedback": 0, "totalComments": 0, "areas": set()},
            )
            stats["totalFeedback"] += feedback_per_session.get(review_session.id, 0)
            stats["totalComments"] += comments_per_session.get(review_session.id, 0)
            stats["areas"].add(review_session.reviewer_area)
            if review_session.status == "completed" and review_session.project_id in active_ids:
                completed_by_project[review_session.project_id].append(review_session)
                reviewed_by_reviewer[review_session.reviewer_id].add(review_session.project_id)

        total = len(projects)
        reviewer_stats = {}
        for reviewer_id, stats in sorted(reviewers.items()):
            reviewed = len(reviewed_by_reviewer[reviewer_id])
            reviewer_stats[reviewer_id] = {
                "reviewed": reviewed,
                "pending": total - reviewed,
                "totalFeedback": stats["totalFeedback"],
                "totalComments": stats["totalComments"],
                "areas": [a for a in REVIEWER_AREA if a in stats["areas"]],
            }

        statuses = [build_review_status(completed_by_project.get(p.id, [])) for p in projects]
        area_stats = {}
        for area in REVIEWER_AREA:
            reviewed = sum(1 for s in statuses if getattr(s, f"{area}_reviewed"))
            area_stats[area] = {"reviewed": reviewed, "pending": total - reviewed}
        fully = sum(1 for s in statuses if s.all_reviewed)

        session_context = {
            s.id: {
                "reviewer_id": s.reviewer_id,
                "reviewer_area": s.reviewer_area,
                "project_id": str(s.project_id),
            }
            for s in sessions
        }
        recent_feedback = [
            {
                **FeedbackResponse.model_validate(f).model_dump(mode="json"),
                **session_context.get(f.review_session_id, {}),
            }
            for f in await self._feedback.get_all(limit=recent_limit)
        ]
        recent_comments = [
            {
                **ReviewCommentResponse.model_validate(c).model_dump(mode="json"),
                **session_context.get(c.review_session_id, {}),
            }
            for c in await self._comments.get_all(limit=recent_limit)
        ]

        return {
            "summary": {
                "totalProjects": total,
                "fullyReviewed": fully,
                "needingReview": total - fully,
                "totalFeedback": sum(feedback_per_session.values()),
                "totalComments": sum(comments_per_session.values()),
            },
            "reviewerStats": reviewer_stats,
            "areaStats": area_stats,
            "feedbackByField": await self._feedback.count_by_field(),
            "recentFeedback": recent_feedback,
            "recentComments": recent_comments,
        }
