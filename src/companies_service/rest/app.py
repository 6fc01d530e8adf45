"""FastAPI application factories."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from companies_service.auth.jwt import TokenService
from companies_service.db.adapter import StorageAdapter, create_storage
from companies_service.events.bus import EventBus
from companies_service.events.dispatcher import EventDispatcher
from companies_service.rest.errors import register_exception_handlers
from companies_service.rest.routes.auth import router as auth_router
from companies_service.rest.routes.company import router as company_router
from companies_service.rest.routes.health import router as health_router
from companies_service.services.auth import AuthResolver
from companies_service.services.company import CompanyResolver
from companies_service.settings import Settings

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    storage: StorageAdapter = app.state.storage
    await storage.initialize()
    yield
    await app.state.dispatcher.drain()
    await storage.close()


def create_app(
    settings: Settings,
    storage: StorageAdapter | None = None,
    bus: EventBus | None = None,
) -> FastAPI:
    """Build the API app. Components are constructed here once and shared by all requests."""
    app = FastAPI(
        title="Companies API",
        description="User auth and company registry",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    storage = storage or create_storage(settings)
    tokens = TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        lifetime=timedelta(minutes=settings.access_token_expire_minutes),
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.token_service = tokens
    app.state.auth_resolver = AuthResolver(
        storage,
        tokens,
        timeout=settings.storage_timeout_seconds,
        hash_rounds=settings.bcrypt_rounds,
    )
    app.state.company_resolver = CompanyResolver(storage, timeout=settings.storage_timeout_seconds)
    app.state.dispatcher = EventDispatcher(
        storage, bus=bus, max_concurrency=settings.event_dispatch_concurrency
    )

    register_exception_handlers(app)

    # Public: register, login, GET /company/{id}; mutations gate on a bearer token per route
    app.include_router(auth_router, tags=["auth"])
    app.include_router(company_router, tags=["company"])

    logger.debug("app_created", database_type=settings.database_type.value)
    return app


def create_health_app() -> FastAPI:
    """Health app, served on ``health_port`` apart from the API."""
    app = FastAPI(title="Companies API health")
    app.include_router(health_router, tags=["health"])
    return app
