"""Exception handlers: the single place errors become HTTP responses."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from companies_service.errors import APIError, InternalServerError

logger = structlog.get_logger(__name__)


def _respond(exc: APIError) -> JSONResponse:
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        logger.error(
            "request_failed",
            path=request.url.path,
            code=exc.code,
            status=exc.status_code,
            message=exc.message,
        )
        return _respond(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException,
    ) -> JSONResponse:
        return JSONResponse(
            {"code": f"HTTP_{exc.status_code}", "message": str(exc.detail)},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        # exception text goes to the log only
        logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
        return _respond(InternalServerError())
