"""Unit tests for the activity event bus."""

import time

import pytest

from sunboard.core.services.event_bus import Event, EventBus


def test_event_serializes_for_polling():
    event = Event(type="task.updated", payload={"fields": ["status"]}, id="x", timestamp=1000.0)
    assert event.to_dict() == {
        "id": "x",
        "type": "task.updated",
        "payload": {"fields": ["status"]},
        "timestamp": 1000.0,
    }


def test_events_get_unique_ids():
    first = Event(type="review.started", payload={})
    second = Event(type="review.started", payload={})
    assert first.id != second.id
    assert first.timestamp > 0


@pytest.fixture
def activity():
    return EventBus()


async def test_publish_returns_the_buffered_event(activity):
    event = await activity.publish("review.completed", {"id": "s1"})

    assert activity.buffer_size == 1
    assert activity.get_recent_events() == [event.to_dict()]


async def test_events_since_is_oldest_first(activity):
    before = time.time() - 1
    await activity.publish("project.created", {"id": "p1"})
    await activity.publish("task.created", {"id": "t1"})

    assert [e["type"] for e in activity.get_events_since(before)] == [
        "project.created",
        "task.created",
    ]
    assert activity.get_events_since(time.time() + 1) == []


async def test_recent_events_keeps_the_newest(activity):
    for n in range(10):
        await activity.publish("review.feedback", {"n": n})

    assert [e["payload"]["n"] for e in activity.get_recent_events(limit=3)] == [7, 8, 9]


async def test_buffer_drops_oldest_when_full():
    activity = EventBus(max_buffer=5)
    for n in range(8):
        await activity.publish("review.comment", {"n": n})

    assert activity.buffer_size == 5
    assert activity.get_recent_events(limit=10)[0]["payload"]["n"] == 3
