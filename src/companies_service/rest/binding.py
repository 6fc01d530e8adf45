"""JSON body decoding with single-violation error reporting."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel, EmailStr, ValidationError

from companies_service.errors import InvalidBodyError
from companies_service.services.models import CompanyType

M = TypeVar("M", bound=BaseModel)

_TYPE_NAMES: dict[Any, str] = {
    str: "string",
    EmailStr: "string",
    int: "int",
    bool: "bool",
    float: "float",
    CompanyType: "string",
}

_REQUIRED_TYPES = {"missing", "string_too_short"}


def _field_of(error: dict[str, Any]) -> str:
    names = [part for part in error.get("loc", ()) if isinstance(part, str) and part != "body"]
    return names[-1] if names else ""


def first_violation(errors: list[dict[str, Any]], shape: type[BaseModel]) -> InvalidBodyError:
    """Turn the first pydantic error into an InvalidBodyError. Later errors are dropped."""
    if not errors:
        return InvalidBodyError()
    error = errors[0]
    kind = error.get("type", "")
    field = _field_of(error)
    info = shape.model_fields.get(field)
    annotation = info.annotation if info is not None else None

    if kind == "json_invalid":
        return InvalidBodyError(f"failed to decode request body: {error.get('msg', '')}")

    required = info is not None and info.is_required()
    if kind in _REQUIRED_TYPES or (required and error.get("input", ...) is None):
        return InvalidBodyError(
            f"{field} is required and must be a {_TYPE_NAMES.get(annotation, 'value')}"
        )

    if kind == "enum" and annotation is CompanyType:
        return InvalidBodyError(f"{field} must be one of: {', '.join(CompanyType.values())}")

    if kind in ("enum", "literal_error"):
        if isinstance(annotation, type) and issubclass(annotation, Enum):
            choices = ", ".join(str(member.value) for member in annotation)
        else:
            choices = str(error.get("ctx", {}).get("expected", ""))
        return InvalidBodyError(f"{field} must be one of: {choices}")

    if kind == "value_error" and annotation is EmailStr:
        return InvalidBodyError(f"{field} must be a valid email address")

    message = error.get("msg", "invalid request body")
    return InvalidBodyError(f"{field}: {message}" if field else message)


def decode_body(raw: bytes, shape: type[M]) -> M:
    """Decode and validate a JSON body. Raises InvalidBodyError naming the first bad field."""
    try:
        return shape.model_validate_json(raw or b"")
    except ValidationError as exc:
        raise first_violation(exc.errors(), shape) from exc


def json_body(shape: type[M]) -> Callable[[Request], Awaitable[M]]:
    """Dependency factory: ``Annotated[Shape, Depends(json_body(Shape))]``."""

    async def _decode(request: Request) -> M:
        return decode_body(await request.body(), shape)

    return _decode
