"""Task model definition."""

from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sunboard.core.database.base import Base


class Task(Base):
    """A unit of work inside exactly one project."""

    __tablename__ = "tasks"

    # Set at creation, never reassigned
    project_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=True)
    phase = Column(String(20), nullable=False, default="discovery", index=True)
    status = Column(String(20), nullable=False, default="not_started", index=True)
    difficulty = Column(String(20), nullable=False, default="medium")
    ai_potential = Column(String(20), nullable=False, default="none")

    owner_team_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True
    )
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    is_foundational = Column(Boolean, nullable=False, default=False)
    is_critical_path = Column(Boolean, nullable=False, default=False)

    project = relationship("Project", back_populates="tasks", lazy="select")
    owner_team = relationship("Team", lazy="select")

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title='{self.title}', phase='{self.phase}')>"
