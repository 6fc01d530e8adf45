"""Health check endpoint, served on its own port."""

import structlog
from fastapi import APIRouter

from companies_service.rest.schemas import MessageResponse

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health", response_model=MessageResponse)
async def health() -> MessageResponse:
    logger.debug("health_check_called")
    return MessageResponse(message="OK")
