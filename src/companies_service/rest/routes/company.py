"""Company endpoints.

Mutations schedule a domain event once the resolver has succeeded; the
response does not wait for it.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter

from companies_service.auth.deps import CurrentClaimsDep
from companies_service.events.models import Event, EventType
from companies_service.rest.deps import (
    CompanyBody,
    CompanyIdDep,
    CompanyResolverDep,
    DispatcherDep,
)
from companies_service.rest.schemas import CompanySchema, MessageResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/company")


@router.get("/{company_id}", response_model=CompanySchema)
async def get_company(company_id: CompanyIdDep, resolver: CompanyResolverDep) -> CompanySchema:
    company = await resolver.get_by_id(str(company_id))
    return CompanySchema.from_company(company)


@router.post("/create", response_model=CompanySchema)
async def create_company(
    claims: CurrentClaimsDep,
    body: CompanyBody,
    resolver: CompanyResolverDep,
    dispatcher: DispatcherDep,
) -> CompanySchema:
    logger.info("create_company_called", subject_id=claims.subject_id, name=body.name)
    company = await resolver.create(body.to_input())
    dispatcher.schedule(Event(type=EventType.COMPANY_CREATED, entity_id=company.id))
    return CompanySchema.from_company(company)


@router.put("/{company_id}", response_model=MessageResponse)
async def update_company(
    claims: CurrentClaimsDep,
    company_id: CompanyIdDep,
    body: CompanyBody,
    resolver: CompanyResolverDep,
    dispatcher: DispatcherDep,
) -> MessageResponse:
    logger.info("update_company_called", subject_id=claims.subject_id, company_id=str(company_id))
    await resolver.update(str(company_id), body.to_input())
    dispatcher.schedule(Event(type=EventType.COMPANY_UPDATED, entity_id=company_id))
    return MessageResponse(message="company updated")


@router.delete("/{company_id}", response_model=MessageResponse)
async def delete_company(
    claims: CurrentClaimsDep,
    company_id: CompanyIdDep,
    resolver: CompanyResolverDep,
    dispatcher: DispatcherDep,
) -> MessageResponse:
    logger.info("delete_company_called", subject_id=claims.subject_id, company_id=str(company_id))
    await resolver.delete(str(company_id))
    dispatcher.schedule(Event(type=EventType.COMPANY_DELETED, entity_id=company_id))
    return MessageResponse(message="company deleted")
