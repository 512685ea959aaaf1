"""Mapping of external representations onto domain values.

Malformed input raises :class:`InvalidInputError` with a message fit for
the caller; the service layer reports it as ``MAPPING_ERROR``.
"""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

BIRTH_DATE_FORMAT = "dd.MM.yyyy"
_BIRTH_DATE_STRPTIME = "%d.%m.%Y"


class InvalidInputError(ValueError):
    """External input could not be mapped to a domain value."""


def parse_birthdate(raw: str) -> date:
    """Parse a ``dd.MM.yyyy`` date.

    Examples:
        >>> parse_birthdate("01.02.1990")
        datetime.date(1990, 2, 1)
    """
    try:
        return datetime.strptime(raw, _BIRTH_DATE_STRPTIME).date()
    except (TypeError, ValueError) as exc:
        msg = f"Birthdate '{raw}' is not parsable using pattern '{BIRTH_DATE_FORMAT}'."
        raise InvalidInputError(msg) from exc


def parse_uuid(raw: str | UUID | None, field: str) -> UUID:
    """Parse *raw* as a UUID, naming *field* in the error message."""
    if isinstance(raw, UUID):
        return raw
    msg = f"Given {field} '{raw}' is not valid."
    if raw is None:
        raise InvalidInputError(msg)
    try:
        return UUID(raw)
    except ValueError as exc:
        raise InvalidInputError(msg) from exc
