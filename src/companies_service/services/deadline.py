"""Per-operation time bound for storage round-trips."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from companies_service.errors import InternalServerError

T = TypeVar("T")


async def within(seconds: float, operation: str, awaitable: Awaitable[T]) -> T:
    """Await ``awaitable`` for at most ``seconds``. A timeout is an InternalServerError; nothing is retried."""
    try:
        async with asyncio.timeout(seconds):
            return await awaitable
    except TimeoutError as exc:
        raise InternalServerError(f"{operation} timed out after {seconds}s") from exc
