"""SQLAlchemy models."""

from sunboard.core.models.pillar import Pillar
from sunboard.core.models.project import Project
from sunboard.core.models.review import ReviewComment, ReviewFeedback, ReviewSession
from sunboard.core.models.task import Task
from sunboard.core.models.team import Team

__all__ = [
    "Pillar",
    "Project",
    "ReviewComment",
    "ReviewFeedback",
    "ReviewSession",
    "Task",
    "Team",
]
