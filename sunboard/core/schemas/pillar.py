"""Pillar schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

SLUG_PATTERN = "^[a-z0-9]+(?:-[a-z0-9]+)*$"


class PillarBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100, pattern=SLUG_PATTERN)
    description: str | None = None
    color: str = Field(default="#6366F1", max_length=20)
    icon: str | None = Field(None, max_length=50)
    order_index: int = 0


class PillarCreate(PillarBase):
    pass


class PillarUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    color: str | None = Field(None, max_length=20)
    icon: str | None = Field(None, max_length=50)
    order_index: int | None = None


class PillarResponse(PillarBase):
    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
