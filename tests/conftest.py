"""Service test fixtures with in-memory storage."""

from __future__ import annotations

import uuid

import pytest
from fastapi.testclient import TestClient

from companies_service.auth.jwt import TokenService
from companies_service.db.memory import InMemoryStorage
from companies_service.rest.app import create_app
from companies_service.settings import DatabaseType, Settings

TEST_SECRET = "test-secret-for-companies-service"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        database_type=DatabaseType.MEMORY,
        bcrypt_rounds=4,
        log_format="console",
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def tokens(settings: Settings) -> TokenService:
    return TokenService(secret=settings.jwt_secret)


@pytest.fixture
def app(settings: Settings, storage: InMemoryStorage):
    return create_app(settings, storage=storage)


@pytest.fixture
def client(app):
    """Test client with lifespan running, so background dispatch shares one event loop."""
    with TestClient(app) as tc:
        yield tc


@pytest.fixture
def auth_headers(tokens: TokenService) -> dict[str, str]:
    token, _ = tokens.issue(str(uuid.uuid4()), "alice@acme.com")
    return {"Authorization": f"Bearer {token}"}
