"""Polling endpoints for recent activity events."""

import time

from fastapi import APIRouter, Depends, Query

from sunboard.api.dependencies import get_event_bus
from sunboard.core.services import EventBus

router = APIRouter()


@router.get("/")
async def poll_events(
    since: float = Query(default=0, description="Unix timestamp; return events after this time"),
    limit: int = Query(default=50, ge=1, le=200, description="Max events to return"),
    events: EventBus = Depends(get_event_bus),
) -> dict:
    """Events published after ``since``, or the most recent ones."""
    if since > 0:
        items = events.get_events_since(since)[:limit]
    else:
        items = events.get_recent_events(limit=limit)

    return {
        "events": items,
        "count": len(items),
        "server_time": time.time(),
    }


@router.get("/recent")
async def recent_events(
    limit: int = Query(default=20, ge=1, le=200),
    events: EventBus = Depends(get_event_bus),
) -> dict:
    return {"events": events.get_recent_events(limit=limit)}


@router.get("/stats")
async def event_stats(events: EventBus = Depends(get_event_bus)) -> dict:
    """Event bus diagnostics."""
    return {
        "buffer_size": events.buffer_size,
        "server_time": time.time(),
    }
