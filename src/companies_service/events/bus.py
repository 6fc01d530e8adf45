"""Outbound event bus slot."""

from __future__ import annotations

from typing import Protocol

import structlog

from companies_service.events.models import Event

logger = structlog.get_logger(__name__)


class EventBus(Protocol):
    async def publish(self, event: Event) -> None: ...


class LoggingEventBus:
    """Placeholder bus: logs the event instead of handing it to a broker."""

    async def publish(self, event: Event) -> None:
        logger.info(
            "event_published",
            event_id=str(event.id),
            event_type=event.type.value,
            entity_id=str(event.entity_id),
            timestamp=event.timestamp.isoformat(),
        )
