"""TransactionService — record transactions and list them per account."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from bankctl.domain.models import Account, Transaction
from bankctl.domain.parsing import InvalidInputError, parse_uuid
from bankctl.domain.types import ErrorCode
from bankctl.infrastructure.repositories import AccountStore, TransactionStore
from bankctl.services._helpers import describe_validation
from bankctl.services.base import BaseService
from bankctl.services.contracts import (
    TransactionItem,
    TransactionListData,
    dump_validated,
    transaction_item,
)
from bankctl.services.result import ServiceResult

if TYPE_CHECKING:
    from uuid import UUID

    from bankctl.infrastructure.bank import Bank
    from bankctl.services.contracts import TransactionDto

log = structlog.get_logger(__name__)


class TransactionService(BaseService):
    """Handles recording and querying transactions."""

    def __init__(self, bank: Bank) -> None:
        super().__init__(bank)
        self._accounts = AccountStore(bank)
        self._transactions = TransactionStore(bank)

    def create_transaction(self, dto: TransactionDto) -> ServiceResult:
        """Record the transaction described by *dto*.

        Failures, in the order they are checked: ``DUPLICATE`` for a known
        ``transaction_id``, then ``REFERENCE_NOT_FOUND`` for the origin and
        then the target account.
        """
        op = "create_transaction"
        log.info("transaction.create.start", origin=dto.origin_id, target=dto.target_id)
        try:
            origin_id = parse_uuid(dto.origin_id, "originId")
            target_id = parse_uuid(dto.target_id, "targetId")
            fields: dict[str, Any] = {"amount": dto.amount}
            if dto.transaction_id is not None:
                fields["transaction_id"] = parse_uuid(dto.transaction_id, "transactionId")
            if dto.created is not None:
                fields["created"] = dto.created
        except InvalidInputError as exc:
            return self._fail(op, ErrorCode.MAPPING_ERROR, str(exc))

        try:
            fields["origin"] = self._resolve(origin_id)
            fields["target"] = self._resolve(target_id)
            transaction = Transaction(**fields)
            outcome = self._transactions.create(transaction)
        except ValidationError as exc:
            return self._fail(op, ErrorCode.MAPPING_ERROR, describe_validation(exc))
        except SQLAlchemyError as exc:
            return self._database_failure(op, exc)
        if not outcome.ok or outcome.value is None:
            return self._refused(op, outcome)

        stored = outcome.value
        log.info("transaction.create.done", transaction_id=str(stored.transaction_id))
        return ServiceResult(
            ok=True, op=op, data=dump_validated(TransactionItem, transaction_item(stored))
        )

    def list_transactions(self, account_id: str | UUID | None) -> ServiceResult:
        """Every transaction touching an account, oldest first."""
        op = "list_transactions"
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
            found = self._transactions.find_all_by_account(account)
        except SQLAlchemyError as exc:
            return self._database_failure(op, exc)

        items = [transaction_item(t) for t in found]
        data = dump_validated(
            TransactionListData,
            {"account_id": str(resolved), "count": len(items), "items": items},
        )
        return ServiceResult(ok=True, op=op, data=data)

    def _resolve(self, account_id: UUID) -> Account:
        """The stored account, or a bare reference for the store to reject."""
        stored = self._accounts.find_by_account_id(account_id)
        if stored is not None:
            return stored
        return Account.model_construct(account_id=account_id)
