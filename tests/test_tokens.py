"""Password hashing and token service tests."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import jwt as pyjwt
import pytest

from companies_service.auth.jwt import TokenService
from companies_service.auth.passwords import hash_password, verify_password
from companies_service.errors import InvalidTokenError

SECRET = "unit-test-secret"


@pytest.fixture
def service() -> TokenService:
    return TokenService(secret=SECRET)


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------


def test_hash_and_verify_password():
    pw = "super-secret-password"
    hashed = hash_password(pw, rounds=4)
    assert hashed != pw
    assert verify_password(pw, hashed)
    assert not verify_password("wrong", hashed)


def test_hash_is_salted():
    assert hash_password("same", rounds=4) != hash_password("same", rounds=4)


def test_verify_against_non_bcrypt_digest_is_false():
    assert not verify_password("anything", "not-a-bcrypt-hash")


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


def test_issue_then_parse_returns_claims(service: TokenService):
    subject = str(uuid.uuid4())
    token, expires_at = service.issue(subject, "alice@acme.com")

    claims = service.validate_and_parse(token)
    assert claims.subject_id == subject
    assert claims.email == "alice@acme.com"
    assert claims.expires_at == expires_at


def test_token_lifetime_is_exactly_ten_minutes(service: TokenService):
    before = datetime.now(UTC).replace(microsecond=0)
    token, _ = service.issue("user-1", "alice@acme.com")
    claims = service.validate_and_parse(token)

    assert claims.expires_at - claims.issued_at == timedelta(minutes=10)
    assert claims.issued_at >= before


def test_expired_token_still_parses(service: TokenService):
    token, expires_at = service.issue("user-1", "x@acme.com", expires_delta=timedelta(seconds=-1))
    claims = service.validate_and_parse(token)
    assert claims.is_expired(datetime.now(UTC))
    assert claims.expires_at == expires_at


def test_wrong_secret_is_invalid(service: TokenService):
    token, _ = TokenService(secret="other-secret").issue("user-1", "x@acme.com")
    with pytest.raises(InvalidTokenError) as exc_info:
        service.validate_and_parse(token)
    assert exc_info.value.status_code == 401


def test_unsigned_token_is_invalid(service: TokenService):
    now = datetime.now(UTC)
    token = pyjwt.encode(
        {"id": "u", "email": "x@acme.com", "iat": now, "exp": now + timedelta(minutes=5)},
        key=None,
        algorithm="none",
    )
    with pytest.raises(InvalidTokenError):
        service.validate_and_parse(token)


def test_token_missing_claims_is_invalid(service: TokenService):
    token = pyjwt.encode({"id": "u"}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        service.validate_and_parse(token)


def test_garbage_is_invalid(service: TokenService):
    with pytest.raises(InvalidTokenError) as exc_info:
        service.validate_and_parse("not.a.token")
    assert exc_info.value.code == "INVALID_TOKEN"
