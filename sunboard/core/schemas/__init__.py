"""Pydantic schemas for API request/response models."""

from sunboard.core.schemas.pillar import PillarCreate, PillarResponse, PillarUpdate
from sunboard.core.schemas.project import (
    ProjectCreate,
    ProjectDetail,
    ProjectResponse,
    ProjectUpdate,
    ReviewStatus,
)
from sunboard.core.schemas.review import (
    FeedbackCreate,
    FeedbackResponse,
    ReviewCommentCreate,
    ReviewCommentResponse,
    ReviewSessionCreate,
    ReviewSessionResponse,
    ReviewSessionUpdate,
)
from sunboard.core.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from sunboard.core.schemas.team import TeamCreate, TeamResponse, TeamUpdate

__all__ = [
    "FeedbackCreate",
    "FeedbackResponse",
    "PillarCreate",
    "PillarResponse",
    "PillarUpdate",
    "ProjectCreate",
    "ProjectDetail",
    "ProjectResponse",
    "ProjectUpdate",
    "ReviewCommentCreate",
    "ReviewCommentResponse",
    "ReviewSessionCreate",
    "ReviewSessionResponse",
    "ReviewSessionUpdate",
    "ReviewStatus",
    "TaskCreate",
    "TaskResponse",
    "TaskUpdate",
    "TeamCreate",
    "TeamResponse",
    "TeamUpdate",
]
