"""Review session, feedback and comment repositories."""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sunboard.core.models.review import ReviewComment, ReviewFeedback, ReviewSession
from sunboard.core.repositories.base import BaseRepository
from sunboard.core.schemas.review import (
    FeedbackCreate,
    ReviewCommentCreate,
    ReviewSessionCreate,
    ReviewSessionUpdate,
)


class ReviewSessionRepository(
    BaseRepository[ReviewSession, ReviewSessionCreate, ReviewSessionUpdate]
):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ReviewSession)

    def _for_triple(self, reviewer_id: str, project_id: UUID, reviewer_area: str):
        return select(ReviewSession).where(
            ReviewSession.reviewer_id == reviewer_id,
            ReviewSession.project_id == project_id,
            ReviewSession.reviewer_area == reviewer_area,
        )

    async def get_open(
        self, reviewer_id: str, project_id: UUID, reviewer_area: str
    ) -> ReviewSession | None:
        stmt = self._for_triple(reviewer_id, project_id, reviewer_area).where(
            ReviewSession.status == "in_progress"
        )
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def get_latest_completed(
        self, reviewer_id: str, project_id: UUID, reviewer_area: str
    ) -> ReviewSession | None:
        stmt = (
            self._for_triple(reviewer_id, project_id, reviewer_area)
            .where(ReviewSession.status == "completed")
            .order_by(ReviewSession.completed_at.desc())
        )
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def get_for_reviewer(
        self, reviewer_id: str, reviewer_area: str | None = None
    ) -> list[ReviewSession]:
        stmt = select(ReviewSession).where(ReviewSession.reviewer_id == reviewer_id)
        if reviewer_area:
            stmt = stmt.where(ReviewSession.reviewer_area == reviewer_area)
        stmt = stmt.order_by(ReviewSession.started_at)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_completed(self) -> list[ReviewSession]:
        stmt = select(ReviewSession).where(ReviewSession.status == "completed")
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_project(self, project_id: UUID) -> list[ReviewSession]:
        stmt = select(ReviewSession).where(ReviewSession.project_id == project_id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def mark_completed(self, review_session: ReviewSession) -> ReviewSession:
        review_session.status = "completed"
        review_session.completed_at = datetime.now(timezone.utc)
        await self._commit()
        await self._session.refresh(review_session)
        return review_session


class ReviewFeedbackRepository(BaseRepository[ReviewFeedback, FeedbackCreate, FeedbackCreate]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ReviewFeedback)

    async def get_by_field(self, session_id: UUID, field_name: str) -> ReviewFeedback | None:
        stmt = select(ReviewFeedback).where(
            ReviewFeedback.review_session_id == session_id,
            ReviewFeedback.field_name == field_name,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def overwrite(self, feedback: ReviewFeedback, obj_in: FeedbackCreate) -> ReviewFeedback:
        feedback.current_value = obj_in.current_value
        feedback.proposed_value = obj_in.proposed_value
        feedback.comment = obj_in.comment
        await self._commit()
        await self._session.refresh(feedback)
        return feedback

    async def get_by_sessions(self, session_ids: list[UUID]) -> list[ReviewFeedback]:
        if not session_ids:
            return []
        stmt = (
            select(ReviewFeedback)
            .where(ReviewFeedback.review_session_id.in_(session_ids))
            .order_by(ReviewFeedback.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_sessions(self, session_ids: list[UUID]) -> int:
        if not session_ids:
            return 0
        stmt = select(func.count(ReviewFeedback.id)).where(
            ReviewFeedback.review_session_id.in_(session_ids)
        )
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def count_per_session(self) -> dict[UUID, int]:
        stmt = select(ReviewFeedback.review_session_id, func.count(ReviewFeedback.id)).group_by(
            ReviewFeedback.review_session_id
        )
        result = await self._session.execute(stmt)
        return dict(result.all())

    async def count_by_field(self) -> dict[str, int]:
        stmt = select(ReviewFeedback.field_name, func.count(ReviewFeedback.id)).group_by(
            ReviewFeedback.field_name
        )
        result = await self._session.execute(stmt)
        return dict(result.all())


class ReviewCommentRepository(
    BaseRepository[ReviewComment, ReviewCommentCreate, ReviewCommentCreate]
):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ReviewComment)

    async def get_by_sessions(self, session_ids: list[UUID]) -> list[ReviewComment]:
        if not session_ids:
            return []
        stmt = (
            select(ReviewComment)
            .where(ReviewComment.review_session_id.in_(session_ids))
            .order_by(ReviewComment.created_at, ReviewComment.id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_sessions(self, session_ids: list[UUID]) -> int:
        if not session_ids:
            return 0
        stmt = select(func.count(ReviewComment.id)).where(
            ReviewComment.review_session_id.in_(session_ids)
        )
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def count_per_session(self) -> dict[UUID, int]:
        stmt = select(ReviewComment.review_session_id, func.count(ReviewComment.id)).group_by(
            ReviewComment.review_session_id
        )
        result = await self._session.execute(stmt)
        return dict(result.all())
