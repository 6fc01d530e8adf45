"""RelationalStorage over a throwaway SQLite database."""

from __future__ import annotations

import uuid

import pytest
from _helpers import company_input

from companies_service.db.engine import Database
from companies_service.db.relational import RelationalStorage
from companies_service.errors import (
    CompanyNotFoundError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from companies_service.events.models import Event, EventType
from companies_service.services.models import Company, CompanyType, User


@pytest.fixture
async def storage(tmp_path):
    store = RelationalStorage(Database(f"sqlite+aiosqlite:///{tmp_path}/companies.db", pool_size=2))
    await store.initialize()
    yield store
    await store.close()


def _user(email: str = "alice@acme.com") -> User:
    return User(id=uuid.uuid4(), email=email, password_hash="$2b$04$digest")


async def test_user_round_trip(storage: RelationalStorage):
    user = _user()
    await storage.create_user(user)
    assert await storage.get_user_by_email("alice@acme.com") == user


async def test_duplicate_email_conflicts(storage: RelationalStorage):
    await storage.create_user(_user())
    with pytest.raises(UserAlreadyExistsError):
        await storage.create_user(_user())


async def test_unknown_email(storage: RelationalStorage):
    with pytest.raises(UserNotFoundError):
        await storage.get_user_by_email("ghost@acme.com")


async def test_company_create_update_delete(storage: RelationalStorage):
    company = Company.from_input(uuid.uuid4(), company_input())
    await storage.create_company(company)
    assert await storage.get_company_by_id(company.id) == company

    changed = Company.from_input(
        company.id,
        company_input(name="Acme Foundation", employee_count=0, type=CompanyType.NON_PROFIT),
    )
    await storage.update_company(changed)
    assert await storage.get_company_by_id(company.id) == changed

    await storage.delete_company(company.id)
    with pytest.raises(CompanyNotFoundError):
        await storage.get_company_by_id(company.id)


async def test_missing_company_rows(storage: RelationalStorage):
    ghost = Company.from_input(uuid.uuid4(), company_input())
    with pytest.raises(CompanyNotFoundError):
        await storage.update_company(ghost)
    with pytest.raises(CompanyNotFoundError):
        await storage.delete_company(ghost.id)


async def test_events_listed_per_entity(storage: RelationalStorage):
    entity = uuid.uuid4()
    created = Event(type=EventType.COMPANY_CREATED, entity_id=entity)
    deleted = Event(type=EventType.COMPANY_DELETED, entity_id=entity)
    other = Event(type=EventType.COMPANY_CREATED, entity_id=uuid.uuid4())
    for event in (created, deleted, other):
        await storage.create_event(event)

    events = await storage.list_events(entity)
    assert [e.id for e in events] == [created.id, deleted.id]
    assert [e.type for e in events] == [EventType.COMPANY_CREATED, EventType.COMPANY_DELETED]


async def test_events_for_deleted_company_survive(storage: RelationalStorage):
    company = Company.from_input(uuid.uuid4(), company_input())
    await storage.create_company(company)
    await storage.create_event(Event(type=EventType.COMPANY_DELETED, entity_id=company.id))
    await storage.delete_company(company.id)

    assert len(await storage.list_events(company.id)) == 1
