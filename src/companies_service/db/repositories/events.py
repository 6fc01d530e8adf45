"""Repository for the append-only event log."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from companies_service.db.models import EventModel


class EventsRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **kwargs) -> EventModel:
        event = EventModel(**kwargs)
        self._session.add(event)
        await self._session.commit()
        return event

    async def list_by_entity(self, entity_id: UUID) -> list[EventModel]:
        result = await self._session.execute(
            select(EventModel)
            .where(EventModel.entity_id == entity_id)
            .order_by(EventModel.timestamp)
        )
        return list(result.scalars().all())
