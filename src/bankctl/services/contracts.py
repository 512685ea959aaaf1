"""Typed contracts for the service boundary.

Input DTOs carry external representations (strings for ids and dates)
that the services map onto domain records.  Output models validate the
payload shapes before they leave the service layer.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from bankctl.domain.models import Account, Transaction, User


T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a JSON-ready payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json")


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class UserDto(BaseModel):
    """External representation of a user to create."""

    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    birth_date: str  # dd.MM.yyyy
    password: str
    user_id: str | None = None


class AccountDto(BaseModel):
    """External representation of an account to create or overwrite."""

    model_config = ConfigDict(frozen=True)

    name: str
    balance: float = 0.0
    dispo: float = 0.0
    limit: float = 0.0
    account_id: str | None = None


class TransactionDto(BaseModel):
    """External representation of a transaction to record."""

    model_config = ConfigDict(frozen=True)

    origin_id: str
    target_id: str
    amount: float
    transaction_id: str | None = None
    created: datetime | None = None


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


class AccountData(BaseModel):
    """Payload for one account."""

    account_id: str
    name: str
    balance: float
    dispo: float
    limit: float
    created: datetime
    last_updated: datetime
    user_id: str | None = None


class UserData(BaseModel):
    """Payload contract for ``UserService.get_user``."""

    user_id: str
    first_name: str
    last_name: str
    birthdate: str
    created: datetime
    last_updated: datetime
    accounts: list[AccountData]


class TransactionItem(BaseModel):
    """One transaction row."""

    transaction_id: str
    origin_id: str
    target_id: str
    amount: float
    created: datetime


class TransactionListData(BaseModel):
    """Payload contract for ``TransactionService.list_transactions``."""

    account_id: str
    count: int
    items: list[TransactionItem]


def account_payload(account: Account) -> dict[str, Any]:
    return dump_validated(
        AccountData,
        {
            "account_id": str(account.account_id),
            "name": account.name,
            "balance": account.balance,
            "dispo": account.dispo,
            "limit": account.limit,
            "created": account.created,
            "last_updated": account.last_updated,
            "user_id": None if account.user_id is None else str(account.user_id),
        },
    )


def user_payload(user: User) -> dict[str, Any]:
    return dump_validated(
        UserData,
        {
            "user_id": str(user.user_id),
            "first_name": user.first_name,
            "last_name": user.last_name,
            "birthdate": user.birthdate.strftime("%d.%m.%Y"),
            "created": user.created,
            "last_updated": user.last_updated,
            "accounts": [account_payload(a) for a in user.accounts],
        },
    )


def transaction_item(transaction: Transaction) -> dict[str, Any]:
    return {
        "transaction_id": str(transaction.transaction_id),
        "origin_id": str(transaction.origin.account_id),
        "target_id": str(transaction.target.account_id),
        "amount": transaction.amount,
        "created": transaction.created,
    }
