"""BaseService — foundation for all bankctl services.

Every service receives a :class:`Bank` at construction time and builds
the stores it needs on top of it.  Each store call is its own unit of
work; services never hold a transaction open across store calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from bankctl.domain.types import ErrorCode
from bankctl.services._helpers import error_message
from bankctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bankctl.domain.types import FailureKind
    from bankctl.infrastructure.bank import Bank
    from bankctl.infrastructure.repositories import StoreOutcome

log = structlog.get_logger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class AccountService(BaseService):
            def create_account(self, ...) -> ServiceResult:
                outcome = AccountStore(self._bank).upsert(user, account)
                ...
    """

    def __init__(self, bank: Bank) -> None:
        self._bank = bank

    @staticmethod
    def _fail(op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        """Build a failed ServiceResult and log it."""
        log.warning("service.failed", op=op, code=str(code), message=message)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=str(code), message=message, detail=detail),
        )

    @classmethod
    def _database_failure(cls, op: str, exc: Exception) -> ServiceResult:
        """Downgrade an unexpected persistence error to ``DATABASE_ERROR``."""
        log.error("service.database_error", op=op, error_type=type(exc).__name__)
        return cls._fail(op, ErrorCode.DATABASE_ERROR, error_message(exc))

    @classmethod
    def _refused(
        cls,
        op: str,
        outcome: StoreOutcome[Any],
        codes: Mapping[FailureKind, ErrorCode] | None = None,
    ) -> ServiceResult:
        """Translate a failed store outcome; unmapped kinds keep their own name."""
        failure = outcome.failure
        if failure is None:
            msg = f"{op}: cannot report a successful store outcome as a failure"
            raise ValueError(msg)
        code = (codes or {}).get(failure.kind) or ErrorCode(failure.kind.value)
        return cls._fail(op, code, failure.message, kind=str(failure.kind))
