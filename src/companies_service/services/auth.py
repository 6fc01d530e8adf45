"""Registration and login."""

from __future__ import annotations

import asyncio
import uuid

import structlog

from companies_service.auth.jwt import TokenService
from companies_service.auth.passwords import DEFAULT_ROUNDS, hash_password, verify_password
from companies_service.db.adapter import StorageAdapter
from companies_service.errors import InvalidCredentialsError, UserNotFoundError
from companies_service.services.deadline import within
from companies_service.services.models import User

logger = structlog.get_logger(__name__)


class AuthResolver:
    def __init__(
        self,
        storage: StorageAdapter,
        tokens: TokenService,
        timeout: float = 10.0,
        hash_rounds: int = DEFAULT_ROUNDS,
    ) -> None:
        self._storage = storage
        self._tokens = tokens
        self._timeout = timeout
        self._hash_rounds = hash_rounds

    async def register(self, email: str, password: str) -> None:
        """Create a user. Raises UserAlreadyExistsError when the email is taken."""
        logger.info("registering_user", email=email)
        password_hash = await asyncio.to_thread(hash_password, password, self._hash_rounds)
        user = User(id=uuid.uuid4(), email=email, password_hash=password_hash)
        await within(self._timeout, "create user", self._storage.create_user(user))
        logger.info("user_registered", email=email, user_id=str(user.id))

    async def login(self, email: str, password: str) -> str:
        """Verify credentials and return a signed access token.

        Unknown emails and wrong passwords both raise InvalidCredentialsError.
        """
        logger.info("logging_in_user", email=email)
        try:
            user = await within(self._timeout, "get user", self._storage.get_user_by_email(email))
        except UserNotFoundError as exc:
            logger.info("login_unknown_email", email=email)
            raise InvalidCredentialsError() from exc

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            logger.info("login_wrong_password", email=email)
            raise InvalidCredentialsError()

        token, expires_at = self._tokens.issue(str(user.id), user.email)
        logger.info("user_logged_in", email=email, expires_at=expires_at.isoformat())
        return token
