"""Domain records — User, Account, Transaction.

Each record carries a stable external id (UUID) that callers see; the
internal storage key never leaves the infrastructure layer.  Records are
frozen pydantic models, so "changing" one means ``model_copy(update=...)``.

Invariants are enforced at construction time:

- ``User.birthdate`` must lie strictly before today minus 18 years.
- ``User.password`` must be at least 16 characters and contain a lowercase
  letter, an uppercase letter, a digit and one of :data:`PASSWORD_SYMBOLS`.
- Amounts, balances, dispo and limits are finite numbers.
- Names and passwords encode as UTF-8 (no lone surrogates).

A violation raises ``pydantic.ValidationError`` (a ``ValueError``).
Timestamps are naive UTC, matching what SQLite round-trips.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

MINIMUM_AGE_YEARS = 18
PASSWORD_MIN_LENGTH = 16
PASSWORD_SYMBOLS = "!@#$%^&*()-_+=?.,:;"

_PASSWORD_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[a-z]"), "a lowercase letter"),
    (re.compile(r"[A-Z]"), "an uppercase letter"),
    (re.compile(r"\d"), "a digit"),
    (re.compile(f"[{re.escape(PASSWORD_SYMBOLS)}]"), f"one of {PASSWORD_SYMBOLS!r}"),
)


def utcnow() -> datetime:
    """Current UTC time without tzinfo."""
    return datetime.now(UTC).replace(tzinfo=None)


def years_before(day: date, years: int) -> date:
    """Return *day* shifted back by *years*; Feb 29 falls back to Feb 28."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


def require_utf8(value: str, label: str) -> str:
    """Return *value*, or raise ValueError if it cannot be stored as UTF-8."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        msg = f"{label} contains a character that is not valid UTF-8 (position {exc.start})"
        raise ValueError(msg) from None
    return value


def password_violations(password: str) -> list[str]:
    """List the password rules *password* breaks (empty when it is valid)."""
    problems: list[str] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        problems.append(f"must be at least {PASSWORD_MIN_LENGTH} characters long")
    for pattern, label in _PASSWORD_RULES:
        if pattern.search(password) is None:
            problems.append(f"must contain {label}")
    return problems


class Account(BaseModel):
    """A named account, optionally owned by a user."""

    model_config = {"frozen": True}

    account_id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1)
    balance: float = Field(default=0.0, allow_inf_nan=False)
    dispo: float = Field(default=0.0, allow_inf_nan=False)
    limit: float = Field(default=0.0, allow_inf_nan=False)
    created: datetime = Field(default_factory=utcnow)
    last_updated: datetime = Field(default_factory=utcnow)
    user_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def _check_name_encoding(cls, value: str) -> str:
        return require_utf8(value, "Account name")


class User(BaseModel):
    """A bank customer.

    Users loaded from storage carry the stored password hash and are built
    without re-running the validators.
    """

    model_config = {"frozen": True}

    user_id: UUID = Field(default_factory=uuid4)
    first_name: str
    last_name: str
    birthdate: date
    password: str
    created: datetime = Field(default_factory=utcnow)
    last_updated: datetime = Field(default_factory=utcnow)
    accounts: tuple[Account, ...] = ()

    @field_validator("first_name", "last_name")
    @classmethod
    def _check_name_encoding(cls, value: str) -> str:
        return require_utf8(value, "Name")

    @field_validator("birthdate")
    @classmethod
    def _check_minimum_age(cls, value: date) -> date:
        cutoff = years_before(utcnow().date(), MINIMUM_AGE_YEARS)
        if value >= cutoff:
            msg = f"User must be older than {MINIMUM_AGE_YEARS} years (born before {cutoff})"
            raise ValueError(msg)
        return value

    @field_validator("password")
    @classmethod
    def _check_password_strength(cls, value: str) -> str:
        require_utf8(value, "Password")
        problems = password_violations(value)
        if problems:
            raise ValueError("Password " + ", ".join(problems))
        return value


class Transaction(BaseModel):
    """A movement of ``amount`` from ``origin`` to ``target``."""

    model_config = {"frozen": True}

    transaction_id: UUID = Field(default_factory=uuid4)
    origin: Account
    target: Account
    amount: float = Field(allow_inf_nan=False)
    created: datetime = Field(default_factory=utcnow)

    @field_validator("created")
    @classmethod
    def _as_naive_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value
        return value.astimezone(UTC).replace(tzinfo=None)
