"""AccountStore — upsert under a user, detach on deletion.

Accounts are never removed: "deleting" one clears its owning-user
reference so the transaction history that points at it stays intact.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import insert, update
from sqlalchemy.exc import IntegrityError

from bankctl.domain.models import Account, utcnow
from bankctl.domain.types import FailureKind
from bankctl.infrastructure.bank import account_from_row, select_accounts
from bankctl.infrastructure.database.engine import is_unique_violation
from bankctl.infrastructure.database.schema import accounts, users
from bankctl.infrastructure.repositories.outcome import StoreOutcome

if TYPE_CHECKING:
    from uuid import UUID

    from bankctl.domain.models import User
    from bankctl.infrastructure.bank import Bank


class AccountStore:
    """Encapsulates SQL for the ``accounts`` table."""

    def __init__(self, bank: Bank) -> None:
        self._bank = bank

    def upsert(self, user: User, account: Account) -> StoreOutcome[Account]:
        """Create or overwrite *account* (keyed by ``account_id``) under *user*.

        A new row gets ``created`` and ``last_updated`` stamped now; an
        existing row keeps its ``created`` and internal id while name,
        balance, dispo, limit and owner are overwritten.

        Returns the account as stored, or a failure:

        - ``REFERENCE_NOT_FOUND`` if *user* is not persisted.
        - ``DUPLICATE`` if *user* already owns another account with this name.
        """
        now = utcnow()
        with self._bank.transaction() as txn:
            owner_id = txn.user_row_id(user.user_id)
            if owner_id is None:
                return StoreOutcome.fail(
                    FailureKind.REFERENCE_NOT_FOUND,
                    f"User '{user.user_id}' not persisted yet!",
                )

            values = {
                "name": account.name,
                "balance": account.balance,
                "dispo": account.dispo,
                "limit": account.limit,
                "user_id": owner_id,
                "last_updated": now,
            }
            row_id = txn.account_row_id(account.account_id)
            try:
                if row_id is None:
                    txn.conn.execute(
                        insert(accounts).values(
                            account_id=account.account_id, created=now, **values
                        )
                    )
                else:
                    txn.conn.execute(
                        update(accounts).where(accounts.c.id == row_id).values(**values)
                    )
            except IntegrityError as exc:
                if not is_unique_violation(exc):
                    raise
                return StoreOutcome.fail(
                    FailureKind.DUPLICATE,
                    f"Account '{account.name}' already exists for user '{user.user_id}'!",
                )

            stored = txn.load_account(account.account_id)

        assert stored is not None
        return StoreOutcome.success(stored)

    def detach(self, account: Account) -> StoreOutcome[Account]:
        """Clear the owning-user reference of *account*.

        Returns ``NOT_FOUND`` if no account with its ``account_id`` exists.
        """
        with self._bank.transaction() as txn:
            row_id = txn.account_row_id(account.account_id)
            if row_id is None:
                return StoreOutcome.fail(
                    FailureKind.NOT_FOUND,
                    f"Account '{account.account_id}' does not exist!",
                )
            txn.conn.execute(update(accounts).where(accounts.c.id == row_id).values(user_id=None))
            stored = txn.load_account(account.account_id)

        assert stored is not None
        return StoreOutcome.success(stored)

    def find_by_account_id(self, account_id: UUID) -> Account | None:
        """Fetch one account by external id."""
        with self._bank.transaction() as txn:
            return txn.load_account(account_id)

    def find_all_by_user(self, user_id: UUID) -> list[Account]:
        """Accounts currently owned by the user, in creation order."""
        stmt = select_accounts().where(users.c.user_id == user_id).order_by(accounts.c.id)
        with self._bank.transaction() as txn:
            rows = txn.conn.execute(stmt).all()
        return [account_from_row(row) for row in rows]
