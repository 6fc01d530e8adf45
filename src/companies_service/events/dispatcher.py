"""Two-phase event dispatch and fire-and-forget scheduling."""

from __future__ import annotations

import asyncio

import structlog

from companies_service.db.adapter import StorageAdapter
from companies_service.errors import EventCreationError, EventPublishError
from companies_service.events.bus import EventBus, LoggingEventBus
from companies_service.events.models import Event

logger = structlog.get_logger(__name__)


class EventDispatcher:
    """Publishes an event to the bus, then records it in storage.

    ``schedule`` runs ``dispatch`` as a detached task: the request that
    triggered it never awaits it, and its failures only reach the log.
    Concurrent dispatches are capped by ``max_concurrency``.
    """

    def __init__(
        self,
        storage: StorageAdapter,
        bus: EventBus | None = None,
        max_concurrency: int = 32,
    ) -> None:
        self._storage = storage
        self._bus = bus or LoggingEventBus()
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def dispatch(self, event: Event) -> None:
        """
        Publish then record.

        The record is always attempted. A failed record raises
        EventCreationError; a failed publish with a successful record raises
        EventPublishError.
        """
        publish_error: Exception | None = None
        logger.debug("publishing_event", event_id=str(event.id), event_type=event.type.value)
        try:
            await self._bus.publish(event)
        except Exception as exc:
            publish_error = exc
            logger.warning("event_publish_failed", event_id=str(event.id), error=str(exc))

        logger.debug("storing_event", event_id=str(event.id))
        try:
            await self._storage.create_event(event)
        except Exception as exc:
            raise EventCreationError(f"failed to store event in database: {exc}") from exc
        logger.debug("event_stored", event_id=str(event.id))

        if publish_error is not None:
            raise EventPublishError(
                f"event '{event.id}' recorded but not published: {publish_error}"
            ) from publish_error

    def schedule(self, event: Event) -> asyncio.Task[None]:
        """Launch dispatch in the background and return immediately."""
        task = asyncio.create_task(self._run(event), name=f"dispatch_{event.id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every scheduled dispatch to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run(self, event: Event) -> None:
        async with self._semaphore:
            try:
                await self.dispatch(event)
            except Exception as exc:
                logger.error(
                    "event_dispatch_failed",
                    event_id=str(event.id),
                    event_type=event.type.value,
                    entity_id=str(event.entity_id),
                    error=str(exc),
                )
