"""Project model definition.

Projects are the unit of review. Each one sits under an optional pillar,
is owned by an optional team, and carries ten assessment fields that the
review workflow solicits feedback on.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, Boolean, Column, Date, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sunboard.core.database.base import Base


class Project(Base):
    """Project model."""

    __tablename__ = "projects"

    title = Column(String(200), nullable=False, index=True)
    slug = Column(String(200), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    why_it_matters = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)

    status = Column(String(20), nullable=False, default="idea", index=True)
    priority = Column(String(20), nullable=False, default="medium", index=True)
    difficulty = Column(String(20), nullable=False, default="medium")

    pillar_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("pillars.id", ondelete="SET NULL"), nullable=True, index=True
    )
    owner_team_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True
    )

    estimated_hours_min = Column(Integer, nullable=True)
    estimated_hours_max = Column(Integer, nullable=True)
    target_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Share of completed tasks, maintained by the task service
    progress_percentage = Column(Integer, nullable=False, default=0)
    is_archived = Column(Boolean, nullable=False, default=False, index=True)
    tags = Column(JSON, nullable=False, default=list)

    # Assessment fields (null = not yet assessed)
    time_horizon = Column(String(20), nullable=True)
    task_list_quality = Column(String(20), nullable=True)
    pain_point_level = Column(String(20), nullable=True)
    adoption_risk = Column(String(20), nullable=True)
    roi_confidence = Column(String(20), nullable=True)
    strategic_alignment = Column(String(20), nullable=True)
    resource_justified = Column(String(20), nullable=True)
    timeline_realistic = Column(String(20), nullable=True)
    tech_debt_risk = Column(String(20), nullable=True)
    data_readiness = Column(String(20), nullable=True)

    pillar = relationship("Pillar", back_populates="projects", lazy="select")
    owner_team = relationship("Team", lazy="select")
    tasks = relationship(
        "Task",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Task.order_index",
        lazy="select",
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, slug='{self.slug}', status='{self.status}')>"
