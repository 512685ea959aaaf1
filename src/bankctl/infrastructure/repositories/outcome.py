"""StoreOutcome — the tagged return value of every store operation.

Stores report domain conditions (missing reference, missing row,
duplicate) as a failed outcome instead of raising; only unexpected
persistence errors propagate as exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from bankctl.domain.types import FailureKind

T = TypeVar("T")


@dataclass(frozen=True)
class StoreFailure:
    """Why a store operation was refused."""

    kind: FailureKind
    message: str


@dataclass(frozen=True)
class StoreOutcome(Generic[T]):
    """Either ``value`` (success) or ``failure``."""

    value: T | None = None
    failure: StoreFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> StoreOutcome[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, kind: FailureKind, message: str) -> StoreOutcome[T]:
        return cls(failure=StoreFailure(kind=kind, message=message))
