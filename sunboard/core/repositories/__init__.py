"""Data access layer."""

from sunboard.core.repositories.base import BaseRepository
from sunboard.core.repositories.catalog import PillarRepository, TeamRepository
from sunboard.core.repositories.project import ProjectRepository
from sunboard.core.repositories.review import (
    ReviewCommentRepository,
    ReviewFeedbackRepository,
    ReviewSessionRepository,
)
from sunboard.core.repositories.task import TaskRepository

__all__ = [
    "BaseRepository",
    "PillarRepository",
    "ProjectRepository",
    "ReviewCommentRepository",
    "ReviewFeedbackRepository",
    "ReviewSessionRepository",
    "TaskRepository",
    "TeamRepository",
]
