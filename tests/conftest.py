"""Shared pytest fixtures and test helpers for bankctl tests."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any, TypeVar

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from bankctl.config.settings import BankSettings
from bankctl.domain.models import Account, User
from bankctl.infrastructure.bank import Bank
from bankctl.infrastructure.database.engine import init_database

# Satisfies every password rule: lower, upper, digit, symbol, 16+ chars.
STRONG_PASSWORD = "Correct-Horse-42!"

# Keeps hashing cheap in tests; production uses the SecurityConfig default.
FAST_SECURITY = {"pbkdf2_iterations": 1000}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep BANKCTL_* variables from the outer environment out of tests."""
    for name in list(os.environ):
        if name.startswith("BANKCTL_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def _restore_root_handlers() -> Generator[None]:
    """Drop handlers the CLI installs so later tests don't log to a closed stream."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    yield
    root.handlers = original_handlers


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def bank(tmp_path: Path) -> Generator[Bank]:
    """Bank backed by a fresh database in a temp directory."""
    settings = BankSettings.from_cli(data_root=tmp_path, security=FAST_SECURITY)
    b = Bank(settings)
    try:
        yield b
    finally:
        b.close()


@pytest.fixture
def _isolated_bank(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory with a bankctl.toml so the CLI uses it.

    Use via ``@pytest.mark.usefixtures("_isolated_bank")`` on command test
    classes.  The config only lowers the password hashing cost.
    """
    (tmp_path / "bankctl.toml").write_text("[security]\npbkdf2_iterations = 1000\n")
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_user(**overrides: Any) -> User:
    """A valid, unsaved User."""
    fields: dict[str, Any] = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "birthdate": "1985-12-10",
        "password": STRONG_PASSWORD,
    }
    fields.update(overrides)
    return User(**fields)


def save_user(bank: Bank, **overrides: Any) -> User:
    """Persist a user via UserStore, asserting success."""
    from bankctl.infrastructure.repositories import UserStore

    outcome = UserStore(bank).save(make_user(**overrides))
    assert outcome.ok, outcome.failure
    assert outcome.value is not None
    return outcome.value


def save_account(bank: Bank, user: User, name: str = "Checking", **fields: Any) -> Account:
    """Upsert an account for *user* via AccountStore, asserting success."""
    from bankctl.infrastructure.repositories import AccountStore

    outcome = AccountStore(bank).upsert(user, Account(name=name, **fields))
    assert outcome.ok, outcome.failure
    assert outcome.value is not None
    return outcome.value


def create_user(bank: Bank, **kwargs: Any) -> dict[str, Any]:
    """Create a user via UserService, asserting success."""
    from bankctl.services.contracts import UserDto
    from bankctl.services.users import UserService

    fields: dict[str, Any] = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "birth_date": "10.12.1985",
        "password": STRONG_PASSWORD,
    }
    fields.update(kwargs)
    result = UserService(bank).create_user(UserDto(**fields))
    assert result.ok, result.error
    return result.data


def create_account(
    bank: Bank, user_id: str, name: str = "Checking", **kwargs: Any
) -> dict[str, Any]:
    """Create an account via AccountService, asserting success."""
    from bankctl.services.accounts import AccountService
    from bankctl.services.contracts import AccountDto

    result = AccountService(bank).create_account(user_id, AccountDto(name=name, **kwargs))
    assert result.ok, result.error
    return result.data


T = TypeVar("T")


def run_concurrently(bank: Bank, count: int, action: Callable[[Bank], T]) -> list[T]:
    """Run *action* on *count* threads at once, each with its own Bank handle.

    The handles share *bank*'s settings, so every thread writes to the same
    database file.  Threads start together behind a barrier; results come
    back in thread order and any exception is re-raised.
    """
    handles = [Bank(bank.settings) for _ in range(count)]
    barrier = threading.Barrier(count)
    results: list[Any] = [None] * count
    errors: list[Exception] = []

    def _worker(index: int) -> None:
        try:
            barrier.wait(timeout=10)
            results[index] = action(handles[index])
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=_worker, args=(i,)) for i in range(count)]
    try:
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)
    finally:
        for handle in handles:
            handle.close()
    if errors:
        raise errors[0]
    return results
