"""Tests for TransactionService."""

from __future__ import annotations

from datetime import datetime
from typing import Any
import math
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from bankctl.infrastructure.bank import Bank
from bankctl.infrastructure.repositories import TransactionStore
from bankctl.services.accounts import AccountService
from bankctl.services.contracts import TransactionDto
from bankctl.services.transactions import TransactionService
from tests.conftest import create_account, create_user


@pytest.fixture
def accounts(bank: Bank) -> tuple[str, str]:
    user_id = create_user(bank)["user_id"]
    origin = create_account(bank, user_id, "Origin")["account_id"]
    target = create_account(bank, user_id, "Target")["account_id"]
    return origin, target


def _dto(origin: str, target: str, amount: float = 10.0, **extra: Any) -> TransactionDto:
    return TransactionDto(origin_id=origin, target_id=target, amount=amount, **extra)


class TestCreateTransaction:
    def test_success(self, bank: Bank, accounts: tuple[str, str]) -> None:
        origin, target = accounts
        result = TransactionService(bank).create_transaction(_dto(origin, target, 12.5))
        assert result.ok
        assert result.op == "create_transaction"
        assert result.data["origin_id"] == origin
        assert result.data["target_id"] == target
        assert result.data["amount"] == 12.5

    def test_explicit_id_and_created(self, bank: Bank, accounts: tuple[str, str]) -> None:
        origin, target = accounts
        transaction_id = str(uuid4())
        result = TransactionService(bank).create_transaction(
            _dto(
                origin,
                target,
                transaction_id=transaction_id,
                created=datetime(2024, 3, 1, 9, 30),
            )
        )
        assert result.data["transaction_id"] == transaction_id
        assert result.data["created"] == "2024-03-01T09:30:00"

    def test_duplicate(self, bank: Bank, accounts: tuple[str, str]) -> None:
        origin, target = accounts
        dto = _dto(origin, target, transaction_id=str(uuid4()))
        svc = TransactionService(bank)
        assert svc.create_transaction(dto).ok

        result = svc.create_transaction(dto)

        assert result.error is not None
        assert result.error.code == "DUPLICATE"

    def test_unknown_origin(self, bank: Bank, accounts: tuple[str, str]) -> None:
        _, target = accounts
        result = TransactionService(bank).create_transaction(_dto(str(uuid4()), target))
        assert result.error is not None
        assert result.error.code == "REFERENCE_NOT_FOUND"
        assert result.error.message.startswith("Origin account")

    def test_unknown_target(self, bank: Bank, accounts: tuple[str, str]) -> None:
        origin, _ = accounts
        result = TransactionService(bank).create_transaction(_dto(origin, str(uuid4())))
        assert result.error is not None
        assert result.error.code == "REFERENCE_NOT_FOUND"
        assert result.error.message.startswith("Target account")

    def test_invalid_origin_id(self, bank: Bank, accounts: tuple[str, str]) -> None:
        _, target = accounts
        result = TransactionService(bank).create_transaction(_dto("nope", target))
        assert result.error is not None
        assert result.error.code == "MAPPING_ERROR"
        assert result.error.message == "Given originId 'nope' is not valid."

    @pytest.mark.parametrize("amount", [math.nan, math.inf])
    def test_non_finite_amount_is_mapping_error(
        self, bank: Bank, accounts: tuple[str, str], amount: float
    ) -> None:
        origin, target = accounts
        result = TransactionService(bank).create_transaction(_dto(origin, target, amount))
        assert result.error is not None
        assert result.error.code == "MAPPING_ERROR"
        assert result.error.message.startswith("amount:")
        assert TransactionService(bank).list_transactions(origin).data["items"] == []

    def test_detached_account_still_usable(self, bank: Bank, accounts: tuple[str, str]) -> None:
        origin, target = accounts
        AccountService(bank).delete_account(origin)
        assert TransactionService(bank).create_transaction(_dto(origin, target)).ok

    def test_database_error(
        self, bank: Bank, accounts: tuple[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _broken(self: TransactionStore, transaction: object) -> None:
            raise OperationalError("INSERT", {}, Exception("disk full"))

        monkeypatch.setattr(TransactionStore, "create", _broken)
        result = TransactionService(bank).create_transaction(_dto(*accounts))
        assert result.error is not None
        assert result.error.code == "DATABASE_ERROR"


class TestListTransactions:
    def test_oldest_first(self, bank: Bank, accounts: tuple[str, str]) -> None:
        origin, target = accounts
        svc = TransactionService(bank)
        ids = [
            svc.create_transaction(_dto(origin, target, 1.0)).data["transaction_id"],
            svc.create_transaction(_dto(target, origin, 2.0)).data["transaction_id"],
            svc.create_transaction(_dto(origin, target, 3.0)).data["transaction_id"],
        ]

        result = svc.list_transactions(origin)

        assert result.ok
        assert result.data["account_id"] == origin
        assert result.data["count"] == 3
        assert [item["transaction_id"] for item in result.data["items"]] == ids

    def test_empty(self, bank: Bank, accounts: tuple[str, str]) -> None:
        result = TransactionService(bank).list_transactions(accounts[0])
        assert result.ok
        assert result.data["count"] == 0
        assert result.data["items"] == []

    def test_unknown_account(self, bank: Bank) -> None:
        result = TransactionService(bank).list_transactions(str(uuid4()))
        assert result.error is not None
        assert result.error.code == "ACCOUNT_NOT_FOUND"

    def test_invalid_id(self, bank: Bank) -> None:
        result = TransactionService(bank).list_transactions("bad")
        assert result.error is not None
        assert result.error.code == "MAPPING_ERROR"
