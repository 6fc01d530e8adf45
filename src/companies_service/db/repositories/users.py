"""Repository for user accounts."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from companies_service.db.models import UserModel


class UsersRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **kwargs) -> UserModel:
        """Insert a user. A duplicate email surfaces as IntegrityError on commit."""
        user = UserModel(**kwargs)
        self._session.add(user)
        await self._session.commit()
        return user

    async def get_by_email(self, email: str) -> UserModel | None:
        result = await self._session.execute(
            select(UserModel).where(UserModel.email == email).limit(1)
        )
        return result.scalars().first()
