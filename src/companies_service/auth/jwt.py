"""JWT token creation and verification."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt

from companies_service.auth.models import TokenClaims
from companies_service.errors import InternalServerError, InvalidTokenError

_REQUIRED_CLAIMS = ["id", "email", "iat", "exp"]


def _now_utc() -> datetime:
    # JWT numeric dates have one-second resolution
    return datetime.now(UTC).replace(microsecond=0)


class TokenService:
    """Issues and parses HS256 bearer tokens carrying a subject identity.

    Parsing verifies signature and structure only. Expiry is left to the
    caller so that an expired token can be told apart from a forged one.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(minutes=10),
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = lifetime

    def issue(
        self,
        subject_id: str,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> tuple[str, datetime]:
        """Create a signed token. Returns (token, expires_at)."""
        if expires_delta is None:
            expires_delta = self._lifetime
        now = _now_utc()
        expires_at = now + expires_delta
        payload = {
            "id": subject_id,
            "email": email,
            "iat": now,
            "exp": expires_at,
        }
        try:
            token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as exc:
            raise InternalServerError(f"failed to sign token: {exc}") from exc
        return token, expires_at

    def validate_and_parse(self, token: str) -> TokenClaims:
        """Verify signature and claim structure. Raises InvalidTokenError on failure."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "require": _REQUIRED_CLAIMS},
            )
            return TokenClaims(
                subject_id=str(payload["id"]),
                email=str(payload["email"]),
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (jwt.PyJWTError, TypeError, ValueError, OverflowError) as exc:
            raise InvalidTokenError(f"invalid token: {exc}") from exc
