"""FastAPI auth dependencies."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

import structlog
from fastapi import Depends, Request

from companies_service.auth.jwt import TokenService
from companies_service.auth.models import TokenClaims
from companies_service.errors import InvalidTokenError, TokenExpiredError, TokenNotFoundError

logger = structlog.get_logger(__name__)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]


async def get_current_claims(request: Request, tokens: TokenServiceDep) -> TokenClaims:
    """
    Gate for protected routes.

    Requires ``Authorization: Bearer <token>``. A missing header or an empty
    token is TOKEN_NOT_FOUND, a token that fails verification is
    INVALID_TOKEN, and a verified token past its expiry is TOKEN_EXPIRED.
    On success the claims are stored on ``request.state.claims``.
    """
    auth_header = request.headers.get("Authorization", "").strip()
    if not auth_header:
        raise TokenNotFoundError("missing Authorization header")

    scheme, _, token = auth_header.partition(" ")
    if scheme != "Bearer":
        raise InvalidTokenError("invalid token: Authorization scheme must be Bearer")
    token = token.strip()
    if not token:
        raise TokenNotFoundError("missing token in Authorization header")

    claims = tokens.validate_and_parse(token)

    if claims.is_expired(datetime.now(UTC)):
        logger.info("token_expired", subject_id=claims.subject_id)
        raise TokenExpiredError("token is expired")

    request.state.claims = claims
    return claims


CurrentClaimsDep = Annotated[TokenClaims, Depends(get_current_claims)]
