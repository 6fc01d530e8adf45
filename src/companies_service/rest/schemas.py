"""Pydantic request/response models for REST API."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator

from companies_service.services.models import Company, CompanyInput, CompanyType

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class LoginRequest(RegisterRequest):
    pass


class CompanyRequest(BaseModel):
    """Body of create and update; both carry the full record."""

    name: str = Field(min_length=1)
    description: str = ""
    # strict: "10" or 1 are type errors, not coerced; 0 and false are valid
    amount_employees: int = Field(strict=True)
    registered: bool = Field(strict=True)
    type: CompanyType

    @field_validator("description", mode="before")
    @classmethod
    def null_description_is_empty(cls, v: object) -> object:
        return "" if v is None else v

    def to_input(self) -> CompanyInput:
        return CompanyInput(
            name=self.name,
            description=self.description,
            employee_count=self.amount_employees,
            is_registered=self.registered,
            type=self.type,
        )


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    access_token: str


class ErrorResponse(BaseModel):
    code: str
    message: str


class CompanySchema(BaseModel):
    id: str
    name: str
    description: str
    amount_employees: int
    registered: bool
    type: CompanyType

    @classmethod
    def from_company(cls, company: Company) -> CompanySchema:
        return cls(
            id=str(company.id),
            name=company.name,
            description=company.description,
            amount_employees=company.employee_count,
            registered=company.is_registered,
            type=company.type,
        )
