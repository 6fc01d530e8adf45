"""FastAPI dependency injection for resolvers and the event dispatcher.

Everything is built once in ``create_app`` and kept on ``app.state``.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request

from companies_service.events.dispatcher import EventDispatcher
from companies_service.rest.binding import json_body
from companies_service.rest.schemas import CompanyRequest, LoginRequest, RegisterRequest
from companies_service.services.auth import AuthResolver
from companies_service.services.company import CompanyResolver, parse_company_id


def get_auth_resolver(request: Request) -> AuthResolver:
    return request.app.state.auth_resolver


def get_company_resolver(request: Request) -> CompanyResolver:
    return request.app.state.company_resolver


def get_dispatcher(request: Request) -> EventDispatcher:
    return request.app.state.dispatcher


AuthResolverDep = Annotated[AuthResolver, Depends(get_auth_resolver)]
CompanyResolverDep = Annotated[CompanyResolver, Depends(get_company_resolver)]
DispatcherDep = Annotated[EventDispatcher, Depends(get_dispatcher)]

RegisterBody = Annotated[RegisterRequest, Depends(json_body(RegisterRequest))]
LoginBody = Annotated[LoginRequest, Depends(json_body(LoginRequest))]
CompanyBody = Annotated[CompanyRequest, Depends(json_body(CompanyRequest))]


def get_company_id(company_id: str) -> UUID:
    """Path parameter check, run before the body is decoded."""
    return parse_company_id(company_id)


CompanyIdDep = Annotated[UUID, Depends(get_company_id)]
