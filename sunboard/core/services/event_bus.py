"""In-memory activity feed served to the dashboard by polling."""

import logging
import time
import uuid
from collections import deque
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

# Maximum events kept in memory for polling
MAX_BUFFER_SIZE = 1000


@dataclass
class Event:
    """A single activity event emitted by the service layer."""

    type: str  # e.g. "project.created", "review.completed"
    payload: dict
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "payload": self.payload,
            "timestamp": self.timestamp,
        }


class EventBus:
    """Bounded buffer of recent activity.

    The dashboard polls ``GET /events?since=<timestamp>``; the oldest events
    fall off once the buffer is full.
    """

    def __init__(self, max_buffer: int = MAX_BUFFER_SIZE) -> None:
        self._buffer: deque[Event] = deque(maxlen=max_buffer)

    async def publish(self, event_type: str, payload: dict) -> Event:
        """Record an event for pollers."""
        event = Event(type=event_type, payload=payload)
        self._buffer.append(event)
        logger.debug("Published event %s (id=%s)", event_type, event.id)
        return event

    def get_events_since(self, since: float) -> list[dict]:
        """Buffered events newer than ``since``, oldest first."""
        return [e.to_dict() for e in self._buffer if e.timestamp > since]

    def get_recent_events(self, limit: int = 50) -> list[dict]:
        events = list(self._buffer)[-limit:]
        return [e.to_dict() for e in events]

    @property
    def buffer_size(self) -> int:
        return len(self._buffer)


event_bus = EventBus()
