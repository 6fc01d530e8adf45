"""AuthResolver tests against in-memory storage."""

from __future__ import annotations

import pytest
from _helpers import SlowStorage

from companies_service.auth.jwt import TokenService
from companies_service.db.memory import InMemoryStorage
from companies_service.errors import (
    InternalServerError,
    InvalidCredentialsError,
    UserAlreadyExistsError,
)
from companies_service.services.auth import AuthResolver


def _resolver(storage, tokens: TokenService, timeout: float = 10.0) -> AuthResolver:
    return AuthResolver(storage, tokens, timeout=timeout, hash_rounds=4)


async def test_register_twice_conflicts(tokens: TokenService):
    resolver = _resolver(InMemoryStorage(), tokens)
    await resolver.register("bob@acme.com", "pw-one")

    with pytest.raises(UserAlreadyExistsError) as exc_info:
        await resolver.register("bob@acme.com", "pw-two")
    assert exc_info.value.status_code == 400


async def test_register_stores_digest_not_password(tokens: TokenService):
    storage = InMemoryStorage()
    await _resolver(storage, tokens).register("carol@acme.com", "plaintext")

    user = await storage.get_user_by_email("carol@acme.com")
    assert user.password_hash != "plaintext"


async def test_login_returns_token_for_user(tokens: TokenService):
    storage = InMemoryStorage()
    resolver = _resolver(storage, tokens)
    await resolver.register("dave@acme.com", "correct horse")

    token = await resolver.login("dave@acme.com", "correct horse")

    claims = tokens.validate_and_parse(token)
    user = await storage.get_user_by_email("dave@acme.com")
    assert claims.email == "dave@acme.com"
    assert claims.subject_id == str(user.id)


async def test_login_wrong_password(tokens: TokenService):
    resolver = _resolver(InMemoryStorage(), tokens)
    await resolver.register("erin@acme.com", "right")

    with pytest.raises(InvalidCredentialsError):
        await resolver.login("erin@acme.com", "wrong")


async def test_login_unknown_email_looks_like_wrong_password(tokens: TokenService):
    resolver = _resolver(InMemoryStorage(), tokens)

    with pytest.raises(InvalidCredentialsError) as exc_info:
        await resolver.login("nobody@acme.com", "anything")
    assert exc_info.value.message == InvalidCredentialsError().message


async def test_storage_timeout_is_internal_error(tokens: TokenService):
    resolver = _resolver(SlowStorage(), tokens, timeout=0.05)

    with pytest.raises(InternalServerError) as exc_info:
        await resolver.login("slow@acme.com", "pw")
    assert "timed out" in exc_info.value.message
