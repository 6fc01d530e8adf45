"""Structured API errors.

Each failure raises a fresh instance: ``code`` and ``status_code`` are fixed
per class, ``message`` belongs to the instance. The HTTP layer is the only
place these are turned into responses.
"""

from __future__ import annotations


class APIError(Exception):
    """Base class for every error that can reach a client."""

    code = "INTERNAL_SERVER_ERROR"
    message = "internal server error"
    status_code = 500

    def __init__(self, message: str | None = None) -> None:
        self.message = message or type(self).message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class InternalServerError(APIError):
    pass


# --- Request ---
class InvalidBodyError(APIError):
    code = "INVALID_BODY"
    message = "invalid request body"
    status_code = 400


class InvalidUUIDError(APIError):
    code = "INVALID_UUID"
    message = "invalid UUID"
    status_code = 400


class CompanyIDRequiredError(APIError):
    code = "COMPANY_ID_REQUIRED"
    message = "company ID is required"
    status_code = 400


# --- Lookups ---
class UserNotFoundError(APIError):
    code = "USER_NOT_FOUND"
    message = "user not found"
    status_code = 400


class UserAlreadyExistsError(APIError):
    code = "USER_ALREADY_EXISTS"
    message = "user already exists"
    status_code = 400


class CompanyNotFoundError(APIError):
    code = "COMPANY_NOT_FOUND"
    message = "company not found"
    status_code = 400


# --- Auth ---
class InvalidCredentialsError(APIError):
    code = "INVALID_CREDENTIALS"
    message = "invalid credentials"
    status_code = 401


class InvalidTokenError(APIError):
    code = "INVALID_TOKEN"
    message = "invalid token"
    status_code = 401


class UnauthorizedError(APIError):
    code = "UNAUTHORIZED"
    message = "unauthorized"
    status_code = 401


class TokenExpiredError(APIError):
    code = "TOKEN_EXPIRED"
    message = "token expired"
    status_code = 401


class TokenNotFoundError(APIError):
    code = "TOKEN_NOT_FOUND"
    message = "token not found"
    status_code = 400


# --- Events ---
class EventCreationError(APIError):
    code = "CREATING_EVENT"
    message = "error creating event"


class EventPublishError(APIError):
    """The event was recorded but the bus rejected it."""

    code = "PUBLISHING_EVENT"
    message = "error publishing event"
