"""Project schemas for API request/response models."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field

from sunboard.core.schemas.pillar import SLUG_PATTERN
from sunboard.core.schemas.task import TaskResponse
from sunboard.core.vocabulary import ASSESSMENT_SCALES, DIFFICULTY, PRIORITY, PROJECT_STATUS


def _assessment(name: str):
    return Field(None, pattern=ASSESSMENT_SCALES[name].pattern)


class AssessmentFields(BaseModel):
    """The ten project-level assessment judgments (None = not yet assessed)."""

    time_horizon: str | None = _assessment("time_horizon")
    task_list_quality: str | None = _assessment("task_list_quality")
    pain_point_level: str | None = _assessment("pain_point_level")
    adoption_risk: str | None = _assessment("adoption_risk")
    roi_confidence: str | None = _assessment("roi_confidence")
    strategic_alignment: str | None = _assessment("strategic_alignment")
    resource_justified: str | None = _assessment("resource_justified")
    timeline_realistic: str | None = _assessment("timeline_realistic")
    tech_debt_risk: str | None = _assessment("tech_debt_risk")
    data_readiness: str | None = _assessment("data_readiness")


class ProjectBase(AssessmentFields):
    """Base schema for Project with common fields."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    why_it_matters: str | None = None
    category: str | None = Field(None, max_length=100)
    status: str = Field(default="idea", pattern=PROJECT_STATUS.pattern)
    priority: str = Field(default="medium", pattern=PRIORITY.pattern)
    difficulty: str = Field(default="medium", pattern=DIFFICULTY.pattern)
    pillar_id: UUID | None = None
    owner_team_id: UUID | None = None
    estimated_hours_min: int | None = Field(None, ge=0)
    estimated_hours_max: int | None = Field(None, ge=0)
    target_date: date | None = None
    tags: list[str] = Field(default_factory=list)


class ProjectCreate(ProjectBase):
    """Schema for creating a project. The slug is derived from the title if omitted."""

    slug: str | None = Field(None, min_length=1, max_length=200, pattern=SLUG_PATTERN)


class ProjectUpdate(AssessmentFields):
    """Schema for updating a project."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    why_it_matters: str | None = None
    category: str | None = Field(None, max_length=100)
    status: str | None = Field(None, pattern=PROJECT_STATUS.pattern)
    priority: str | None = Field(None, pattern=PRIORITY.pattern)
    difficulty: str | None = Field(None, pattern=DIFFICULTY.pattern)
    pillar_id: UUID | None = None
    owner_team_id: UUID | None = None
    estimated_hours_min: int | None = Field(None, ge=0)
    estimated_hours_max: int | None = Field(None, ge=0)
    target_date: date | None = None
    tags: list[str] | None = None
    is_archived: bool | None = None


class ProjectResponse(ProjectBase):
    """Schema for project responses."""

    id: UUID
    slug: str
    progress_percentage: int
    is_archived: bool
    created_at: datetime
    updated_at: datetime
    task_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class ReviewStatus(BaseModel):
    """Per-area review completion summary for one project."""

    management_reviewed: bool = False
    operations_sales_reviewed: bool = False
    product_tech_reviewed: bool = False
    review_count: int = 0

    @computed_field
    @property
    def all_reviewed(self) -> bool:
        return (
            self.management_reviewed
            and self.operations_sales_reviewed
            and self.product_tech_reviewed
        )


class ProjectDetail(ProjectResponse):
    """Project with its tasks and review status."""

    tasks: list[TaskResponse] = Field(default_factory=list)
    review_status: ReviewStatus = Field(default_factory=ReviewStatus)
