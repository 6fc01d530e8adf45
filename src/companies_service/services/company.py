"""Company business rules."""

from __future__ import annotations

import uuid
from uuid import UUID

import structlog

from companies_service.db.adapter import StorageAdapter
from companies_service.errors import CompanyIDRequiredError, InvalidUUIDError
from companies_service.services.deadline import within
from companies_service.services.models import Company, CompanyInput

logger = structlog.get_logger(__name__)


def parse_company_id(raw: str | None) -> UUID:
    """Shared id check for the HTTP layer and the resolver."""
    if raw is None or not raw.strip():
        raise CompanyIDRequiredError()
    try:
        return UUID(raw)
    except ValueError as exc:
        raise InvalidUUIDError(f"invalid UUID: '{raw}'") from exc


class CompanyResolver:
    def __init__(self, storage: StorageAdapter, timeout: float = 10.0) -> None:
        self._storage = storage
        self._timeout = timeout

    async def create(self, data: CompanyInput) -> Company:
        logger.info("creating_company", name=data.name)
        company = Company.from_input(uuid.uuid4(), data)
        await within(self._timeout, "create company", self._storage.create_company(company))
        logger.info("company_created", company_id=str(company.id))
        return company

    async def get_by_id(self, company_id: str) -> Company:
        logger.info("retrieving_company", company_id=company_id)
        uid = parse_company_id(company_id)
        return await within(self._timeout, "get company", self._storage.get_company_by_id(uid))

    async def update(self, company_id: str, data: CompanyInput) -> None:
        """Replace every field of the company at ``company_id``."""
        logger.info("updating_company", company_id=company_id)
        uid = parse_company_id(company_id)
        company = Company.from_input(uid, data)
        await within(self._timeout, "update company", self._storage.update_company(company))
        logger.info("company_updated", company_id=company_id)

    async def delete(self, company_id: str) -> None:
        logger.info("deleting_company", company_id=company_id)
        uid = parse_company_id(company_id)
        await within(self._timeout, "delete company", self._storage.delete_company(uid))
        logger.info("company_deleted", company_id=company_id)
