"""Repository for companies."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from companies_service.db.models import CompanyModel


class CompaniesRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **kwargs: Any) -> CompanyModel:
        company = CompanyModel(**kwargs)
        self._session.add(company)
        await self._session.commit()
        return company

    async def get(self, company_id: UUID) -> CompanyModel | None:
        return await self._session.get(CompanyModel, company_id)

    async def replace(self, company_id: UUID, **values: Any) -> int:
        """Overwrite every given column. Returns the number of rows touched."""
        result = await self._session.execute(
            update(CompanyModel).where(CompanyModel.id == company_id).values(**values)
        )
        await self._session.commit()
        return result.rowcount

    async def delete(self, company_id: UUID) -> int:
        result = await self._session.execute(
            delete(CompanyModel).where(CompanyModel.id == company_id)
        )
        await self._session.commit()
        return result.rowcount
