"""Service layer."""

from sunboard.core.services.event_bus import EventBus, event_bus
from sunboard.core.services.project import ProjectService
from sunboard.core.services.review import ReviewService
from sunboard.core.services.task import TaskService

__all__ = [
    "EventBus",
    "ProjectService",
    "ReviewService",
    "TaskService",
    "event_bus",
]
