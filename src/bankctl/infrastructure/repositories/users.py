"""UserStore — persistence of users; deletion detaches their accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from bankctl.domain.models import User
from bankctl.domain.types import FailureKind
from bankctl.infrastructure.bank import account_from_row, select_accounts
from bankctl.infrastructure.database.engine import is_unique_violation
from bankctl.infrastructure.database.schema import accounts, users
from bankctl.infrastructure.passwords import hash_password
from bankctl.infrastructure.repositories.outcome import StoreOutcome

if TYPE_CHECKING:
    from uuid import UUID

    from bankctl.infrastructure.bank import Bank


class UserStore:
    """Encapsulates SQL for the ``users`` table."""

    def __init__(self, bank: Bank) -> None:
        self._bank = bank

    def save(self, user: User) -> StoreOutcome[User]:
        """Persist a new user; the password is stored hashed."""
        iterations = self._bank.settings.security.pbkdf2_iterations
        password_hash = hash_password(user.password, iterations=iterations)

        with self._bank.transaction() as txn:
            if txn.user_row_id(user.user_id) is not None:
                return StoreOutcome.fail(
                    FailureKind.DUPLICATE, f"User '{user.user_id}' already exists!"
                )
            try:
                txn.conn.execute(
                    insert(users).values(
                        user_id=user.user_id,
                        first_name=user.first_name,
                        last_name=user.last_name,
                        birthdate=user.birthdate,
                        password_hash=password_hash,
                        created=user.created,
                        last_updated=user.last_updated,
                    )
                )
            except IntegrityError as exc:
                if not is_unique_violation(exc):
                    raise
                return StoreOutcome.fail(
                    FailureKind.DUPLICATE,
                    f"User '{user.first_name} {user.last_name}' born {user.birthdate} "
                    "already exists!",
                )

        return StoreOutcome.success(
            user.model_copy(update={"password": password_hash, "accounts": ()})
        )

    def find_by_user_id(self, user_id: UUID) -> User | None:
        """Fetch a user and the accounts it currently owns."""
        with self._bank.transaction() as txn:
            row = txn.conn.execute(select(users).where(users.c.user_id == user_id)).first()
            if row is None:
                return None
            account_rows = txn.conn.execute(
                select_accounts().where(accounts.c.user_id == row.id).order_by(accounts.c.id)
            ).all()

        # Persisted rows were validated on the way in.
        return User.model_construct(
            user_id=row.user_id,
            first_name=row.first_name,
            last_name=row.last_name,
            birthdate=row.birthdate,
            password=row.password_hash,
            created=row.created,
            last_updated=row.last_updated,
            accounts=tuple(account_from_row(r) for r in account_rows),
        )

    def delete(self, user: User) -> StoreOutcome[User]:
        """Detach every account the user owns, then remove the user row."""
        with self._bank.transaction() as txn:
            row_id = txn.user_row_id(user.user_id)
            if row_id is None:
                return StoreOutcome.fail(
                    FailureKind.NOT_FOUND, f"User '{user.user_id}' does not exist!"
                )
            txn.conn.execute(
                update(accounts).where(accounts.c.user_id == row_id).values(user_id=None)
            )
            txn.conn.execute(delete(users).where(users.c.id == row_id))
        return StoreOutcome.success(user)
