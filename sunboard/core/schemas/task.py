"""Task schemas for API request/response models."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from sunboard.core.vocabulary import AI_POTENTIAL, DIFFICULTY, TASK_PHASE, TASK_STATUS


class TaskBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    description: str | None = None
    phase: str = Field(default="discovery", pattern=TASK_PHASE.pattern)
    status: str = Field(default="not_started", pattern=TASK_STATUS.pattern)
    difficulty: str = Field(default="medium", pattern=DIFFICULTY.pattern)
    ai_potential: str = Field(default="none", pattern=AI_POTENTIAL.pattern)
    owner_team_id: UUID | None = None
    due_date: date | None = None
    order_index: int = 0
    is_foundational: bool = False
    is_critical_path: bool = False


class TaskCreate(TaskBase):
    project_id: UUID


class TaskUpdate(BaseModel):
    """Schema for updating a task. ``project_id`` is deliberately absent."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=300)
    description: str | None = None
    phase: str | None = Field(None, pattern=TASK_PHASE.pattern)
    status: str | None = Field(None, pattern=TASK_STATUS.pattern)
    difficulty: str | None = Field(None, pattern=DIFFICULTY.pattern)
    ai_potential: str | None = Field(None, pattern=AI_POTENTIAL.pattern)
    owner_team_id: UUID | None = None
    due_date: date | None = None
    order_index: int | None = None
    is_foundational: bool | None = None
    is_critical_path: bool | None = None


class TaskResponse(TaskBase):
    id: UUID
    project_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
