"""Command group: user lifecycle (create, show, delete)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bankctl.commands._base import BankGroup
from bankctl.services.contracts import UserDto
from bankctl.services.users import UserService

if TYPE_CHECKING:
    from bankctl.commands._context import AppContext

_USER_EXAMPLES = """\
  bankctl user create --first-name Ada --last-name Lovelace \\
      --birth-date 10.12.1985 --password 'Sup3r-Secret-Pass!'
  bankctl user show 0b6f0b4e-2c1d-4c35-9a57-2f1b0f1e7a11
  bankctl --json user delete 0b6f0b4e-2c1d-4c35-9a57-2f1b0f1e7a11"""


@click.group(cls=BankGroup, examples=_USER_EXAMPLES)
@click.pass_obj
def user(app: AppContext) -> None:
    """Create, inspect, and delete users."""


@user.command(
    examples="""\
  bankctl user create --first-name Ada --last-name Lovelace \\
      --birth-date 10.12.1985 --password 'Sup3r-Secret-Pass!'
  bankctl user create --first-name Alan --last-name Turing \\
      --birth-date 23.06.1990 --password 'An0ther-Long-Passw0rd' \\
      --user-id 0b6f0b4e-2c1d-4c35-9a57-2f1b0f1e7a11"""
)
@click.option("--first-name", required=True, help="Given name.")
@click.option("--last-name", required=True, help="Family name.")
@click.option("--birth-date", required=True, help="Birth date as dd.MM.yyyy.")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    help="At least 16 characters with lower, upper, digit, and symbol.",
)
@click.option("--user-id", default=None, help="Explicit user id (UUID); generated if omitted.")
@click.pass_obj
def create(
    app: AppContext,
    first_name: str,
    last_name: str,
    birth_date: str,
    password: str,
    user_id: str | None,
) -> None:
    """Register a new user."""
    dto = UserDto(
        first_name=first_name,
        last_name=last_name,
        birth_date=birth_date,
        password=password,
        user_id=user_id,
    )
    app.emit(UserService(app.bank).create_user(dto))


@user.command()
@click.argument("user_id")
@click.pass_obj
def show(app: AppContext, user_id: str) -> None:
    """Show a user and the accounts it owns."""
    app.emit(UserService(app.bank).get_user(user_id))


@user.command(
    examples="""\
  bankctl user delete 0b6f0b4e-2c1d-4c35-9a57-2f1b0f1e7a11"""
)
@click.argument("user_id")
@click.pass_obj
def delete(app: AppContext, user_id: str) -> None:
    """Delete a user; its accounts are kept but detached."""
    app.emit(UserService(app.bank).delete_user(user_id))
