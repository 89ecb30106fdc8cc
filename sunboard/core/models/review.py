"""Review workflow models.

A ReviewSession ties one reviewer to one project under one reviewer area.
Feedback rows are unique per (session, field_name); comments are append-only.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sunboard.core.database.base import Base, utcnow


class ReviewSession(Base):
    __tablename__ = "review_sessions"
    __table_args__ = (
        # At most one open session per (reviewer, project, area)
        Index(
            "uq_review_sessions_open",
            "reviewer_id",
            "project_id",
            "reviewer_area",
            unique=True,
            sqlite_where=text("status = 'in_progress'"),
            postgresql_where=text("status = 'in_progress'"),
        ),
    )

    reviewer_id = Column(String(255), nullable=False, index=True)
    project_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reviewer_area = Column(String(30), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="in_progress", index=True)

    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    project = relationship("Project", lazy="select")
    feedback = relationship(
        "ReviewFeedback", back_populates="session", cascade="all, delete-orphan"
    )
    comments = relationship(
        "ReviewComment", back_populates="session", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return (
            f"<ReviewSession(id={self.id}, reviewer='{self.reviewer_id}', "
            f"area='{self.reviewer_area}', status='{self.status}')>"
        )


class ReviewFeedback(Base):
    __tablename__ = "review_feedback"
    __table_args__ = (
        UniqueConstraint("review_session_id", "field_name", name="uq_review_feedback_field"),
    )

    review_session_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("review_sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    field_name = Column(String(100), nullable=False)
    current_value = Column(Text, nullable=True)
    proposed_value = Column(Text, nullable=True)
    comment = Column(Text, nullable=True)

    session = relationship("ReviewSession", back_populates="feedback")


class ReviewComment(Base):
    __tablename__ = "review_comments"

    review_session_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("review_sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    project_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    task_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True
    )
    content = Column(Text, nullable=False)

    session = relationship("ReviewSession", back_populates="comments")
