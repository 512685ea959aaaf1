"""TransactionStore — record transactions between persisted accounts.

``create`` checks its preconditions in a fixed order so the reported
failure is deterministic:

1. duplicate ``transaction_id``  -> ``DUPLICATE``
2. origin account not persisted -> ``REFERENCE_NOT_FOUND`` (origin)
3. target account not persisted -> ``REFERENCE_NOT_FOUND`` (target)

Referential integrity is checked here, before the insert, rather than
left to the foreign keys; the stored row points at the accounts'
internal ids.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, or_, select
from sqlalchemy.exc import IntegrityError

from bankctl.domain.models import Transaction
from bankctl.domain.types import FailureKind
from bankctl.infrastructure.database.engine import is_unique_violation
from bankctl.infrastructure.database.schema import transactions
from bankctl.infrastructure.repositories.outcome import StoreOutcome

if TYPE_CHECKING:
    from uuid import UUID

    from bankctl.domain.models import Account
    from bankctl.infrastructure.bank import Bank, BankTransaction


class TransactionStore:
    """Encapsulates SQL for the ``transactions`` table."""

    def __init__(self, bank: Bank) -> None:
        self._bank = bank

    def create(self, transaction: Transaction) -> StoreOutcome[Transaction]:
        """Record *transaction* once both of its accounts are persisted."""
        with self._bank.transaction() as txn:
            existing = txn.conn.execute(
                select(transactions.c.id).where(
                    transactions.c.transaction_id == transaction.transaction_id
                )
            ).first()
            if existing is not None:
                return _duplicate(transaction)

            origin_id = txn.account_row_id(transaction.origin.account_id)
            if origin_id is None:
                return StoreOutcome.fail(
                    FailureKind.REFERENCE_NOT_FOUND,
                    f"Origin account '{transaction.origin.account_id}' not persisted yet!",
                )
            target_id = txn.account_row_id(transaction.target.account_id)
            if target_id is None:
                return StoreOutcome.fail(
                    FailureKind.REFERENCE_NOT_FOUND,
                    f"Target account '{transaction.target.account_id}' not persisted yet!",
                )

            try:
                txn.conn.execute(
                    insert(transactions).values(
                        transaction_id=transaction.transaction_id,
                        origin_id=origin_id,
                        target_id=target_id,
                        amount=transaction.amount,
                        created=transaction.created,
                    )
                )
            except IntegrityError as exc:
                if not is_unique_violation(exc):
                    raise
                return _duplicate(transaction)

            stored = txn.load_accounts([origin_id, target_id])

        return StoreOutcome.success(
            transaction.model_copy(
                update={"origin": stored[origin_id], "target": stored[target_id]}
            )
        )

    def find_all_by_account(self, account: Account) -> list[Transaction]:
        """Transactions where *account* is origin or target, oldest first.

        Returns an empty list for an account with no transactions or one
        that was never persisted.
        """
        with self._bank.transaction() as txn:
            row_id = txn.account_row_id(account.account_id)
            if row_id is None:
                return []
            rows = txn.conn.execute(
                select(transactions)
                .where(or_(transactions.c.origin_id == row_id, transactions.c.target_id == row_id))
                .order_by(transactions.c.id)
            ).all()
            return _to_transactions(txn, rows)

    def find_by_transaction_id(self, transaction_id: UUID) -> Transaction | None:
        """Fetch one transaction by external id."""
        with self._bank.transaction() as txn:
            row = txn.conn.execute(
                select(transactions).where(transactions.c.transaction_id == transaction_id)
            ).first()
            if row is None:
                return None
            return _to_transactions(txn, [row])[0]


def _duplicate(transaction: Transaction) -> StoreOutcome[Transaction]:
    return StoreOutcome.fail(
        FailureKind.DUPLICATE,
        f"Transaction '{transaction.transaction_id}' already exists!",
    )


def _to_transactions(txn: BankTransaction, rows: list[Any]) -> list[Transaction]:
    by_id = txn.load_accounts([r.origin_id for r in rows] + [r.target_id for r in rows])
    return [
        Transaction(
            transaction_id=row.transaction_id,
            origin=by_id[row.origin_id],
            target=by_id[row.target_id],
            amount=row.amount,
            created=row.created,
        )
        for row in rows
    ]
