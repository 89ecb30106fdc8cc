"""Review workflow schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from sunboard.core.vocabulary import REVIEWER_AREA


class ReviewSessionCreate(BaseModel):
    project_id: UUID
    reviewer_id: str = Field(..., min_length=1, max_length=255)
    reviewer_area: str = Field(..., pattern=REVIEWER_AREA.pattern)


class ReviewSessionUpdate(BaseModel):
    """Body of ``PUT /reviews``; only completion is a valid transition."""

    id: UUID
    status: str = Field(..., pattern="^completed$")


class ReviewSessionResponse(BaseModel):
    id: UUID
    project_id: UUID
    reviewer_id: str
    reviewer_area: str
    status: str
    started_at: datetime
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FeedbackCreate(BaseModel):
    review_session_id: UUID
    field_name: str = Field(..., min_length=1, max_length=100)
    current_value: str | None = None
    proposed_value: str | None = None
    comment: str | None = None


class FeedbackResponse(BaseModel):
    id: UUID
    review_session_id: UUID
    field_name: str
    current_value: str | None
    proposed_value: str | None
    comment: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewCommentCreate(BaseModel):
    review_session_id: UUID
    project_id: UUID
    task_id: UUID | None = None
    content: str = Field(..., min_length=1)


class ReviewCommentResponse(BaseModel):
    id: UUID
    review_session_id: UUID
    project_id: UUID
    task_id: UUID | None
    content: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewStats(BaseModel):
    totalProjects: int
    reviewedProjects: int
    pendingProjects: int
    progress: int


class PendingReviewResponse(BaseModel):
    """Shape of ``GET /reviews``. Projects are enriched dicts."""

    projects: list[dict]
    pendingReview: list[dict]
    completedReview: list[dict]
    stats: ReviewStats
