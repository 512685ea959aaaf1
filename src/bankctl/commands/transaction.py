"""Command group: transactions (create, list)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bankctl.commands._base import BankGroup
from bankctl.services.contracts import TransactionDto
from bankctl.services.transactions import TransactionService

if TYPE_CHECKING:
    from bankctl.commands._context import AppContext

_TRANSACTION_EXAMPLES = """\
  bankctl transaction create 5d0c7c83-2a0e-4d3b-8f4e-9c2c4a1b6e55 \\
      9e4a1f20-77b3-4c0e-a3f1-0d8f6b2c9a44 42.50
  bankctl transaction list 5d0c7c83-2a0e-4d3b-8f4e-9c2c4a1b6e55
  bankctl --json transaction list 5d0c7c83-2a0e-4d3b-8f4e-9c2c4a1b6e55"""


@click.group(cls=BankGroup, examples=_TRANSACTION_EXAMPLES)
@click.pass_obj
def transaction(app: AppContext) -> None:
    """Record and list transactions."""


@transaction.command(
    examples="""\
  bankctl transaction create 5d0c7c83-2a0e-4d3b-8f4e-9c2c4a1b6e55 \\
      9e4a1f20-77b3-4c0e-a3f1-0d8f6b2c9a44 42.50
  bankctl transaction create 5d0c7c83-2a0e-4d3b-8f4e-9c2c4a1b6e55 \\
      9e4a1f20-77b3-4c0e-a3f1-0d8f6b2c9a44 10 \\
      --transaction-id 3c2b1a09-8f7e-4d6c-b5a4-93827160f5e4"""
)
@click.argument("origin_id")
@click.argument("target_id")
@click.argument("amount", type=float)
@click.option("--transaction-id", default=None, help="Explicit transaction id (UUID).")
@click.pass_obj
def create(
    app: AppContext,
    origin_id: str,
    target_id: str,
    amount: float,
    transaction_id: str | None,
) -> None:
    """Record AMOUNT moving from ORIGIN_ID to TARGET_ID."""
    dto = TransactionDto(
        origin_id=origin_id,
        target_id=target_id,
        amount=amount,
        transaction_id=transaction_id,
    )
    app.emit(TransactionService(app.bank).create_transaction(dto))


@transaction.command(name="list")
@click.argument("account_id")
@click.pass_obj
def list_cmd(app: AppContext, account_id: str) -> None:
    """List every transaction touching ACCOUNT_ID, oldest first."""
    app.emit(TransactionService(app.bank).list_transactions(account_id))
