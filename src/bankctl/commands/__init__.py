"""The ``user``, ``account`` and ``transaction`` command groups.

Groups are imported inside :func:`register_commands` so importing the
root CLI module stays cheap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach every command group to *cli*."""
    from bankctl.commands.account import account
    from bankctl.commands.transaction import transaction
    from bankctl.commands.user import user

    for group in (user, account, transaction):
        cli.add_command(group)
