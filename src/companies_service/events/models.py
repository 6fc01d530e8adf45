"""Domain events recorded after successful company mutations."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from uuid import UUID


class EventType(str, Enum):
    COMPANY_CREATED = "company.created"
    COMPANY_UPDATED = "company.updated"
    COMPANY_DELETED = "company.deleted"


@dataclass(frozen=True)
class Event:
    """An append-only record; ``entity_id`` is a weak reference to the company."""
    type: EventType
    entity_id: UUID
    id: UUID = field(default_factory=uuid.uuid4)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
