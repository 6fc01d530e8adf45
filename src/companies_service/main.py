"""Entry point - starts the API and health servers."""

import asyncio
import logging

import structlog
import uvicorn

from companies_service.rest.app import create_app, create_health_app
from companies_service.settings import Settings

logger = structlog.get_logger()


def configure_logging(settings: Settings) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level, logging.INFO)
        ),
    )


async def main() -> None:
    """Serve the API on ``port`` and the health check on ``health_port``."""
    settings = Settings()
    configure_logging(settings)

    api = uvicorn.Server(
        uvicorn.Config(
            create_app(settings),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    )
    health = uvicorn.Server(
        uvicorn.Config(
            create_health_app(),
            host=settings.host,
            port=settings.health_port,
            log_level=settings.log_level.lower(),
        )
    )

    logger.info(
        "starting_service",
        port=settings.port,
        health_port=settings.health_port,
        database_type=settings.database_type.value,
    )
    health_task = asyncio.create_task(health.serve())
    try:
        await api.serve()
    finally:
        # signals reach only one server; stop the health server with the API
        health.should_exit = True
        await health_task


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
