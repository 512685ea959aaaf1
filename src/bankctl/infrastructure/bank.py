"""Bank — the persistent-store handle with unit-of-work coordination.

The Bank is the single dependency injected into every store and service.
It owns the database engine and exposes :meth:`transaction`, the one
atomic unit of work each store operation runs in:

- Native SQLAlchemy ``engine.begin()`` with auto-commit on success and
  auto-rollback on exception.
- Every transaction opens with ``BEGIN IMMEDIATE`` (see
  :mod:`bankctl.infrastructure.database.engine`), so reads that precede
  a write already hold the write lock.

Lifecycle is explicit: construct at startup, :meth:`close` at shutdown
(or use the Bank as a context manager).
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from bankctl.domain.models import Account
from bankctl.infrastructure.database.engine import init_database
from bankctl.infrastructure.database.schema import accounts, users

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from uuid import UUID

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from bankctl.config.settings import BankSettings

logger = logging.getLogger(__name__)


ACCOUNT_COLUMNS = (
    accounts.c.id,
    accounts.c.account_id,
    accounts.c.name,
    accounts.c.balance,
    accounts.c.dispo,
    accounts.c.limit,
    accounts.c.created,
    accounts.c.last_updated,
    users.c.user_id.label("owner_id"),
)


def account_from_row(row: Any) -> Account:
    """Build an Account from a row selected via :data:`ACCOUNT_COLUMNS`."""
    return Account(
        account_id=row.account_id,
        name=row.name,
        balance=row.balance,
        dispo=row.dispo,
        limit=row.limit,
        created=row.created,
        last_updated=row.last_updated,
        user_id=row.owner_id,
    )


def select_accounts() -> Any:
    """SELECT of :data:`ACCOUNT_COLUMNS` with the owner's external id joined in."""
    return select(*ACCOUNT_COLUMNS).select_from(
        accounts.outerjoin(users, accounts.c.user_id == users.c.id)
    )


# ---------------------------------------------------------------------------
# BankTransaction — yielded to callers within transaction()
# ---------------------------------------------------------------------------


@dataclass
class BankTransaction:
    """Active unit of work: a DB connection plus shared lookups.

    Stores resolve external ids to internal row ids through these helpers
    so the lookup rules live in one place.
    """

    conn: Connection

    def user_row_id(self, user_id: UUID) -> int | None:
        """Internal id of the user with external id *user_id*, if persisted."""
        row = self.conn.execute(select(users.c.id).where(users.c.user_id == user_id)).first()
        return None if row is None else int(row.id)

    def account_row_id(self, account_id: UUID) -> int | None:
        """Internal id of the account with external id *account_id*, if persisted."""
        row = self.conn.execute(
            select(accounts.c.id).where(accounts.c.account_id == account_id)
        ).first()
        return None if row is None else int(row.id)

    def load_account(self, account_id: UUID) -> Account | None:
        """Fetch one account by external id."""
        row = self.conn.execute(
            select_accounts().where(accounts.c.account_id == account_id)
        ).first()
        return None if row is None else account_from_row(row)

    def load_accounts(self, row_ids: Iterable[int]) -> dict[int, Account]:
        """Fetch accounts by internal id, keyed by that id."""
        ids = sorted(set(row_ids))
        if not ids:
            return {}
        rows = self.conn.execute(select_accounts().where(accounts.c.id.in_(ids))).all()
        return {int(row.id): account_from_row(row) for row in rows}


# ---------------------------------------------------------------------------
# Bank — the store handle
# ---------------------------------------------------------------------------


class Bank:
    """Handle on the persistent store.

    Constructed once at CLI startup from :class:`BankSettings`.  Stores and
    services receive the Bank through their constructors.
    """

    def __init__(self, settings: BankSettings) -> None:
        self._settings = settings
        db = settings.database
        self._engine: Engine = init_database(
            self.root,
            filename=db.filename,
            busy_timeout=db.busy_timeout,
            echo=db.echo,
        )
        logger.debug("Opened bank database in %s", self.root)

    @property
    def root(self) -> Path:
        """Directory holding the database file."""
        return self._settings.data_root

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> BankSettings:
        """The resolved settings for this bank."""
        return self._settings

    @contextmanager
    def transaction(self) -> Iterator[BankTransaction]:
        """One atomic unit of work.

        Commits when the block exits normally and rolls back when it
        raises; nothing written inside a failed block is observable.

        Usage::

            with bank.transaction() as txn:
                txn.conn.execute(insert(accounts).values(...))
        """
        with self._engine.begin() as conn:
            yield BankTransaction(conn=conn)

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()
        logger.debug("Closed bank database in %s", self.root)

    def __enter__(self) -> Bank:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
