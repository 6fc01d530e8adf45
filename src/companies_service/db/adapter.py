"""Protocol for pluggable storage backends and the startup-time selector."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from companies_service.events.models import Event
from companies_service.services.models import Company, User
from companies_service.settings import DatabaseType, Settings


class StorageAdapter(Protocol):
    """CRUD keyed by entity id.

    Absence and conflicts are reported with typed errors
    (UserNotFoundError, CompanyNotFoundError, UserAlreadyExistsError); any
    other backend fault is an InternalServerError.
    """

    async def initialize(self) -> None: ...
    async def close(self) -> None: ...

    async def create_user(self, user: User) -> None: ...
    async def get_user_by_email(self, email: str) -> User: ...

    async def create_company(self, company: Company) -> None: ...
    async def get_company_by_id(self, company_id: UUID) -> Company: ...
    async def update_company(self, company: Company) -> None: ...
    async def delete_company(self, company_id: UUID) -> None: ...

    async def create_event(self, event: Event) -> None: ...
    async def list_events(self, entity_id: UUID) -> list[Event]: ...


def create_storage(settings: Settings) -> StorageAdapter:
    """Build the configured backend. Called once at startup."""
    if settings.database_type is DatabaseType.POSTGRES:
        from companies_service.db.engine import Database
        from companies_service.db.relational import RelationalStorage

        return RelationalStorage(Database(settings.sqlalchemy_url, pool_size=settings.db_pool_size))
    if settings.database_type is DatabaseType.MEMORY:
        from companies_service.db.memory import InMemoryStorage

        return InMemoryStorage()
    raise ValueError(f"Unsupported database type: {settings.database_type}")
