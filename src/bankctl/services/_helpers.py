"""Shared service-layer helper functions."""

from __future__ import annotations

from pydantic import ValidationError

UNEXPECTED_ERROR_MESSAGE = "Unexpected error occurred."


def error_message(exc: BaseException) -> str:
    """The exception's message, or a generic fallback when it has none."""
    text = str(exc).strip()
    return text or UNEXPECTED_ERROR_MESSAGE


def validation_fields(exc: ValidationError) -> set[str]:
    """Top-level field names that failed validation."""
    return {str(err["loc"][0]) for err in exc.errors() if err["loc"]}


def describe_validation(exc: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one readable line.

    Examples:
        ``"password: Value error, Password must contain a digit"``
    """
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else str(err["msg"]))
    return "; ".join(parts)
