"""Tests for Bank — the store handle and its unit of work."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from uuid import uuid4

import pytest
from sqlalchemy import Connection, func, insert, select

from bankctl.config.settings import BankSettings
from bankctl.infrastructure.bank import Bank
from bankctl.infrastructure.database.schema import accounts
from tests.conftest import save_account, save_user

NOW = datetime(2024, 1, 1, 12, 0)


def _account_count(bank: Bank) -> int:
    with bank.transaction() as txn:
        return txn.conn.execute(select(func.count()).select_from(accounts)).scalar_one()


def _insert_detached(conn: Connection, name: str) -> None:
    conn.execute(
        insert(accounts).values(
            account_id=uuid4(),
            name=name,
            balance=0.0,
            dispo=0.0,
            limit=0.0,
            created=NOW,
            last_updated=NOW,
            user_id=None,
        )
    )


class TestBankLifecycle:
    def test_creates_database_in_data_root(self, tmp_path: Path) -> None:
        with Bank(BankSettings.from_cli(data_root=tmp_path)) as bank:
            assert bank.root == tmp_path
            assert (tmp_path / "bankctl.db").exists()

    def test_database_filename_from_settings(self, tmp_path: Path) -> None:
        settings = BankSettings.from_cli(data_root=tmp_path, database={"filename": "other.db"})
        with Bank(settings):
            assert (tmp_path / "other.db").exists()

    def test_settings_exposed(self, bank: Bank) -> None:
        assert bank.settings.security.pbkdf2_iterations == 1000


class TestTransaction:
    def test_commits_on_success(self, bank: Bank) -> None:
        with bank.transaction() as txn:
            _insert_detached(txn.conn, "Kept")
        assert _account_count(bank) == 1

    def test_rolls_back_on_error(self, bank: Bank) -> None:
        with pytest.raises(RuntimeError):
            with bank.transaction() as txn:
                _insert_detached(txn.conn, "Lost")
                raise RuntimeError("boom")
        assert _account_count(bank) == 0


class TestBankTransactionLookups:
    def test_row_ids_for_unknown_ids(self, bank: Bank) -> None:
        with bank.transaction() as txn:
            assert txn.user_row_id(uuid4()) is None
            assert txn.account_row_id(uuid4()) is None
            assert txn.load_account(uuid4()) is None

    def test_load_account_carries_owner(self, bank: Bank) -> None:
        user = save_user(bank)
        account = save_account(bank, user)
        with bank.transaction() as txn:
            loaded = txn.load_account(account.account_id)
        assert loaded is not None
        assert loaded.user_id == user.user_id
        assert loaded.name == "Checking"

    def test_load_accounts_keyed_by_row_id(self, bank: Bank) -> None:
        user = save_user(bank)
        first = save_account(bank, user, "First")
        second = save_account(bank, user, "Second")
        with bank.transaction() as txn:
            first_row = txn.account_row_id(first.account_id)
            second_row = txn.account_row_id(second.account_id)
            assert first_row is not None and second_row is not None
            loaded = txn.load_accounts([second_row, first_row, first_row])
        assert set(loaded) == {first_row, second_row}
        assert loaded[first_row].account_id == first.account_id

    def test_load_accounts_empty(self, bank: Bank) -> None:
        with bank.transaction() as txn:
            assert txn.load_accounts([]) == {}
