"""AccountService — create (upsert) and delete (detach) accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from bankctl.domain.models import Account
from bankctl.domain.parsing import InvalidInputError, parse_uuid
from bankctl.domain.types import ErrorCode, FailureKind
from bankctl.infrastructure.repositories import AccountStore, UserStore
from bankctl.services._helpers import describe_validation
from bankctl.services.base import BaseService
from bankctl.services.contracts import account_payload
from bankctl.services.result import ServiceResult

if TYPE_CHECKING:
    from uuid import UUID

    from bankctl.infrastructure.bank import Bank
    from bankctl.services.contracts import AccountDto

log = structlog.get_logger(__name__)

_UPSERT_CODES = {
    FailureKind.REFERENCE_NOT_FOUND: ErrorCode.USER_NOT_FOUND,
    FailureKind.DUPLICATE: ErrorCode.ACCOUNT_ALREADY_EXIST,
}


class AccountService(BaseService):
    """Handles the account lifecycle."""

    def __init__(self, bank: Bank) -> None:
        super().__init__(bank)
        self._users = UserStore(bank)
        self._accounts = AccountStore(bank)

    def create_account(self, user_id: str | UUID | None, dto: AccountDto) -> ServiceResult:
        """Create the account described by *dto* for a user, or overwrite it.

        Supplying the ``account_id`` of an existing account updates that
        account in place.
        """
        op = "create_account"
        log.info("account.create.start", user_id=str(user_id), name=dto.name)
        try:
            resolved = parse_uuid(user_id, "userId")
        except InvalidInputError as exc:
            return self._fail(op, ErrorCode.MAPPING_ERROR, str(exc))

        try:
            user = self._users.find_by_user_id(resolved)
        except SQLAlchemyError as exc:
            return self._database_failure(op, exc)
        if user is None:
            return self._fail(
                op, ErrorCode.USER_NOT_FOUND, f"User with userId '{resolved}' not found."
            )

        try:
            account = _to_account(dto)
        except InvalidInputError as exc:
            return self._fail(op, ErrorCode.MAPPING_ERROR, str(exc))
        except ValidationError as exc:
            return self._fail(op, ErrorCode.MAPPING_ERROR, describe_validation(exc))

        try:
            outcome = self._accounts.upsert(user, account)
        except SQLAlchemyError as exc:
            return self._database_failure(op, exc)
        if not outcome.ok or outcome.value is None:
            return self._refused(op, outcome, _UPSERT_CODES)

        stored = outcome.value
        log.info("account.create.done", account_id=str(stored.account_id), user_id=str(resolved))
        return ServiceResult(ok=True, op=op, data=account_payload(stored))

    def delete_account(self, account_id: str | UUID | None) -> ServiceResult:
        """Detach an account from its owner; the account and its history remain."""
        op = "delete_account"
        log.info("account.delete.start", account_id=str(account_id))
        try:
            resolved = parse_uuid(account_id, "accountId")
        except InvalidInputError as exc:
            return self._fail(op, ErrorCode.MAPPING_ERROR, str(exc))

        try:
            account = self._accounts.find_by_account_id(resolved)
            if account is None:
                return self._fail(
                    op,
                    ErrorCode.ACCOUNT_NOT_FOUND,
                    f"Account with accountId '{resolved}' not found.",
                )
            outcome = self._accounts.detach(account)
        except SQLAlchemyError as exc:
            return self._database_failure(op, exc)
        if not outcome.ok or outcome.value is None:
            return self._refused(op, outcome, {FailureKind.NOT_FOUND: ErrorCode.ACCOUNT_NOT_FOUND})

        log.info("account.delete.done", account_id=str(resolved))
        return ServiceResult(ok=True, op=op, data=account_payload(outcome.value))


def _to_account(dto: AccountDto) -> Account:
    """Map an AccountDto onto an Account, generating an account_id unless one is given."""
    fields: dict[str, Any] = {
        "name": dto.name,
        "balance": dto.balance,
        "dispo": dto.dispo,
        "limit": dto.limit,
    }
    if dto.account_id is not None:
        fields["account_id"] = parse_uuid(dto.account_id, "accountId")
    return Account(**fields)
