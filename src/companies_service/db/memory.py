"""In-memory storage for testing and development."""

from __future__ import annotations

from uuid import UUID

from companies_service.errors import CompanyNotFoundError, UserAlreadyExistsError, UserNotFoundError
from companies_service.events.models import Event
from companies_service.services.models import Company, User


class InMemoryStorage:
    """Dict-backed StorageAdapter. Operations never await, so each is atomic on the loop."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._companies: dict[UUID, Company] = {}
        self._events: list[Event] = []

    async def initialize(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def create_user(self, user: User) -> None:
        if user.email in self._users:
            raise UserAlreadyExistsError(f"user with email '{user.email}' already exists")
        self._users[user.email] = user

    async def get_user_by_email(self, email: str) -> User:
        user = self._users.get(email)
        if user is None:
            raise UserNotFoundError(f"user with email '{email}' not found")
        return user

    async def create_company(self, company: Company) -> None:
        self._companies[company.id] = company

    async def get_company_by_id(self, company_id: UUID) -> Company:
        company = self._companies.get(company_id)
        if company is None:
            raise CompanyNotFoundError(f"company with id '{company_id}' not found")
        return company

    async def update_company(self, company: Company) -> None:
        if company.id not in self._companies:
            raise CompanyNotFoundError(f"company with id '{company.id}' not found")
        self._companies[company.id] = company

    async def delete_company(self, company_id: UUID) -> None:
        if self._companies.pop(company_id, None) is None:
            raise CompanyNotFoundError(f"company with id '{company_id}' not found")

    async def create_event(self, event: Event) -> None:
        self._events.append(event)

    async def list_events(self, entity_id: UUID) -> list[Event]:
        events = [e for e in self._events if e.entity_id == entity_id]
        return sorted(events, key=lambda e: e.timestamp)
