"""Relational storage backed by SQLAlchemy's async ORM."""

from __future__ import annotations

from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from companies_service.db.engine import Database
from companies_service.db.models import CompanyModel, EventModel, UserModel
from companies_service.db.repositories.companies import CompaniesRepo
from companies_service.db.repositories.events import EventsRepo
from companies_service.db.repositories.users import UsersRepo
from companies_service.errors import (
    CompanyNotFoundError,
    InternalServerError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from companies_service.events.models import Event, EventType
from companies_service.services.models import Company, CompanyType, User

logger = structlog.get_logger(__name__)


def _to_user(row: UserModel) -> User:
    return User(id=row.id, email=row.email, password_hash=row.password_hash)


def _to_company(row: CompanyModel) -> Company:
    return Company(
        id=row.id,
        name=row.name,
        description=row.description,
        employee_count=row.amount_employees,
        is_registered=row.registered,
        type=CompanyType(row.type),
    )


def _company_columns(company: Company) -> dict:
    return {
        "name": company.name,
        "description": company.description,
        "amount_employees": company.employee_count,
        "registered": company.is_registered,
        "type": company.type.value,
    }


def _to_event(row: EventModel) -> Event:
    return Event(id=row.id, type=EventType(row.type), entity_id=row.entity_id, timestamp=row.timestamp)


class RelationalStorage:
    """StorageAdapter over a pooled SQLAlchemy engine.

    Every operation checks out its own session, so concurrent requests never
    share a connection.
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        try:
            await self._db.create_schema()
        except SQLAlchemyError as exc:
            raise InternalServerError(f"failed to connect to database: {exc}") from exc
        logger.info("storage_initialized", backend="relational")

    async def close(self) -> None:
        await self._db.close()
        logger.debug("storage_closed", backend="relational")

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def create_user(self, user: User) -> None:
        logger.debug("creating_user", email=user.email)
        try:
            async with self._db.session_factory() as session:
                await UsersRepo(session).create(
                    id=user.id, email=user.email, password_hash=user.password_hash
                )
        except IntegrityError as exc:
            raise UserAlreadyExistsError(f"user with email '{user.email}' already exists") from exc
        except SQLAlchemyError as exc:
            raise InternalServerError(f"failed to create user: {exc}") from exc

    async def get_user_by_email(self, email: str) -> User:
        try:
            async with self._db.session_factory() as session:
                row = await UsersRepo(session).get_by_email(email)
        except SQLAlchemyError as exc:
            raise InternalServerError(f"failed to retrieve user by email: {exc}") from exc
        if row is None:
            raise UserNotFoundError(f"user with email '{email}' not found")
        return _to_user(row)

    # ------------------------------------------------------------------
    # Companies
    # ------------------------------------------------------------------

    async def create_company(self, company: Company) -> None:
        logger.debug("creating_company", company_id=str(company.id))
        try:
            async with self._db.session_factory() as session:
                await CompaniesRepo(session).create(id=company.id, **_company_columns(company))
        except SQLAlchemyError as exc:
            raise InternalServerError(f"failed to create company: {exc}") from exc

    async def get_company_by_id(self, company_id: UUID) -> Company:
        try:
            async with self._db.session_factory() as session:
                row = await CompaniesRepo(session).get(company_id)
        except SQLAlchemyError as exc:
            raise InternalServerError(f"failed to retrieve company by id: {exc}") from exc
        if row is None:
            raise CompanyNotFoundError(f"company with id '{company_id}' not found")
        return _to_company(row)

    async def update_company(self, company: Company) -> None:
        try:
            async with self._db.session_factory() as session:
                touched = await CompaniesRepo(session).replace(company.id, **_company_columns(company))
        except SQLAlchemyError as exc:
            raise InternalServerError(f"failed to update company by id: {exc}") from exc
        if touched == 0:
            raise CompanyNotFoundError(f"company with id '{company.id}' not found")

    async def delete_company(self, company_id: UUID) -> None:
        try:
            async with self._db.session_factory() as session:
                touched = await CompaniesRepo(session).delete(company_id)
        except SQLAlchemyError as exc:
            raise InternalServerError(f"failed to delete company by id: {exc}") from exc
        if touched == 0:
            raise CompanyNotFoundError(f"company with id '{company_id}' not found")

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def create_event(self, event: Event) -> None:
        try:
            async with self._db.session_factory() as session:
                await EventsRepo(session).create(
                    id=event.id,
                    type=event.type.value,
                    timestamp=event.timestamp,
                    entity_id=event.entity_id,
                )
        except SQLAlchemyError as exc:
            raise InternalServerError(f"failed to create event: {exc}") from exc

    async def list_events(self, entity_id: UUID) -> list[Event]:
        try:
            async with self._db.session_factory() as session:
                rows = await EventsRepo(session).list_by_entity(entity_id)
        except SQLAlchemyError as exc:
            raise InternalServerError(f"failed to list events: {exc}") from exc
        return [_to_event(row) for row in rows]
