"""Stores — the only components that touch persistent state."""

from bankctl.infrastructure.repositories.accounts import AccountStore
from bankctl.infrastructure.repositories.outcome import StoreFailure, StoreOutcome
from bankctl.infrastructure.repositories.transactions import TransactionStore
from bankctl.infrastructure.repositories.users import UserStore

__all__ = [
    "AccountStore",
    "StoreFailure",
    "StoreOutcome",
    "TransactionStore",
    "UserStore",
]
