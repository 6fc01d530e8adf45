"""EventDispatcher: two-phase dispatch and detached scheduling."""

from __future__ import annotations

import asyncio
import uuid

import pytest
from _helpers import BrokenEventStorage
from structlog.testing import capture_logs

from companies_service.db.memory import InMemoryStorage
from companies_service.errors import EventCreationError, EventPublishError
from companies_service.events.dispatcher import EventDispatcher
from companies_service.events.models import Event, EventType


class FailingBus:
    async def publish(self, event: Event) -> None:
        raise ConnectionError("broker unreachable")


class RecordingBus:
    def __init__(self) -> None:
        self.published: list[Event] = []

    async def publish(self, event: Event) -> None:
        self.published.append(event)


class GatedBus:
    """Blocks every publish until released; tracks peak concurrency."""

    def __init__(self) -> None:
        self.release = asyncio.Event()
        self.active = 0
        self.peak = 0

    async def publish(self, event: Event) -> None:
        self.active += 1
        self.peak = max(self.peak, self.active)
        await self.release.wait()
        self.active -= 1


def _event(kind: EventType = EventType.COMPANY_CREATED) -> Event:
    return Event(type=kind, entity_id=uuid.uuid4())


async def test_dispatch_publishes_and_records():
    storage = InMemoryStorage()
    bus = RecordingBus()
    event = _event()

    await EventDispatcher(storage, bus=bus).dispatch(event)

    assert bus.published == [event]
    assert await storage.list_events(event.entity_id) == [event]


async def test_publish_failure_still_records():
    storage = InMemoryStorage()
    event = _event(EventType.COMPANY_UPDATED)

    with pytest.raises(EventPublishError) as exc_info:
        await EventDispatcher(storage, bus=FailingBus()).dispatch(event)

    assert exc_info.value.code == "PUBLISHING_EVENT"
    assert await storage.list_events(event.entity_id) == [event]


async def test_record_failure_is_event_creation_error():
    with pytest.raises(EventCreationError) as exc_info:
        await EventDispatcher(BrokenEventStorage()).dispatch(_event())

    assert exc_info.value.code == "CREATING_EVENT"
    assert exc_info.value.message.startswith("failed to store event in database")


async def test_schedule_returns_before_dispatch_completes():
    storage = InMemoryStorage()
    bus = GatedBus()
    dispatcher = EventDispatcher(storage, bus=bus)
    event = _event()

    dispatcher.schedule(event)
    await asyncio.sleep(0)
    assert dispatcher.pending == 1
    assert await storage.list_events(event.entity_id) == []

    bus.release.set()
    await dispatcher.drain()
    assert dispatcher.pending == 0
    assert await storage.list_events(event.entity_id) == [event]


async def test_scheduled_failure_is_only_logged():
    dispatcher = EventDispatcher(BrokenEventStorage())
    event = _event(EventType.COMPANY_DELETED)

    with capture_logs() as logs:
        dispatcher.schedule(event)
        await dispatcher.drain()

    failures = [entry for entry in logs if entry["event"] == "event_dispatch_failed"]
    assert len(failures) == 1
    assert failures[0]["log_level"] == "error"
    assert failures[0]["event_type"] == "company.deleted"
    assert failures[0]["entity_id"] == str(event.entity_id)


async def test_concurrency_is_bounded():
    bus = GatedBus()
    dispatcher = EventDispatcher(InMemoryStorage(), bus=bus, max_concurrency=2)

    for _ in range(5):
        dispatcher.schedule(_event())
    for _ in range(5):
        await asyncio.sleep(0)
    assert bus.active == 2

    bus.release.set()
    await dispatcher.drain()
    assert bus.peak == 2
