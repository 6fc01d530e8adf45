"""Auth endpoints: register, login."""

from __future__ import annotations

import structlog
from fastapi import APIRouter

from companies_service.rest.deps import AuthResolverDep, LoginBody, RegisterBody
from companies_service.rest.schemas import LoginResponse, MessageResponse

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(body: RegisterBody, resolver: AuthResolverDep) -> MessageResponse:
    """Create a user account."""
    logger.info("register_endpoint_called")
    await resolver.register(body.email, body.password)
    return MessageResponse(message="user registered")


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginBody, resolver: AuthResolverDep) -> LoginResponse:
    """Verify credentials and return an access token."""
    logger.info("login_endpoint_called")
    token = await resolver.login(body.email, body.password)
    return LoginResponse(access_token=token)
