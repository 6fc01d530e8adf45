"""Domain records exchanged between resolvers and storage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class CompanyType(str, Enum):
    """Legal form of a company. Values are the accepted wire strings."""
    CORPORATION = "Corporations"
    NON_PROFIT = "NonProfit"
    COOPERATIVE = "Cooperative"
    SOLE_PROPRIETORSHIP = "Sole Proprietorship"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


@dataclass(frozen=True)
class User:
    id: UUID
    email: str
    password_hash: str


@dataclass(frozen=True)
class CompanyInput:
    """Every mutable company field; updates replace all of them."""
    name: str
    employee_count: int
    is_registered: bool
    type: CompanyType
    description: str = ""


@dataclass(frozen=True)
class Company:
    id: UUID
    name: str
    description: str
    employee_count: int
    is_registered: bool
    type: CompanyType

    @classmethod
    def from_input(cls, company_id: UUID, data: CompanyInput) -> Company:
        return cls(
            id=company_id,
            name=data.name,
            description=data.description,
            employee_count=data.employee_count,
            is_registered=data.is_registered,
            type=data.type,
        )
