"""Command group: account lifecycle (create, delete)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bankctl.commands._base import BankGroup
from bankctl.services.accounts import AccountService
from bankctl.services.contracts import AccountDto

if TYPE_CHECKING:
    from bankctl.commands._context import AppContext

_ACCOUNT_EXAMPLES = """\
  bankctl account create 0b6f0b4e-2c1d-4c35-9a57-2f1b0f1e7a11 --name Checking
  bankctl account create 0b6f0b4e-2c1d-4c35-9a57-2f1b0f1e7a11 --name Savings --balance 250
  bankctl account delete 5d0c7c83-2a0e-4d3b-8f4e-9c2c4a1b6e55"""


@click.group(cls=BankGroup, examples=_ACCOUNT_EXAMPLES)
@click.pass_obj
def account(app: AppContext) -> None:
    """Create and delete accounts."""


@account.command(
    examples="""\
  bankctl account create 0b6f0b4e-2c1d-4c35-9a57-2f1b0f1e7a11 --name Checking
  bankctl account create 0b6f0b4e-2c1d-4c35-9a57-2f1b0f1e7a11 --name Checking \\
      --dispo 500 --limit 1000 --account-id 5d0c7c83-2a0e-4d3b-8f4e-9c2c4a1b6e55"""
)
@click.argument("user_id")
@click.option("--name", required=True, help="Account name (unique per user).")
@click.option("--balance", type=float, default=0.0, show_default=True, help="Balance.")
@click.option("--dispo", type=float, default=0.0, show_default=True, help="Overdraft facility.")
@click.option("--limit", type=float, default=0.0, show_default=True, help="Spending limit.")
@click.option(
    "--account-id",
    default=None,
    help="Explicit account id (UUID). An existing id overwrites that account.",
)
@click.pass_obj
def create(
    app: AppContext,
    user_id: str,
    name: str,
    balance: float,
    dispo: float,
    limit: float,
    account_id: str | None,
) -> None:
    """Create an account for USER_ID, or overwrite one."""
    dto = AccountDto(
        name=name,
        balance=balance,
        dispo=dispo,
        limit=limit,
        account_id=account_id,
    )
    app.emit(AccountService(app.bank).create_account(user_id, dto))


@account.command()
@click.argument("account_id")
@click.pass_obj
def delete(app: AppContext, account_id: str) -> None:
    """Detach an account from its owner (history is kept)."""
    app.emit(AccountService(app.bank).delete_account(account_id))
