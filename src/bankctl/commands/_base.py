"""Click command classes carrying on-demand usage examples.

Commands and groups built with ``examples="..."`` grow an eager
``--examples`` flag that prints the text and exits before any required
argument is checked, so ``bankctl account create --examples`` works
without a user id.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


def _examples_option(text: str) -> click.Option:
    """Build the eager ``--examples`` flag that prints *text*."""

    def _print(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(textwrap.indent(text, "  "))
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_print,
        help="Show usage examples and exit.",
    )


class _ExamplesMixin:
    """Normalizes an ``examples`` block and registers the flag for it."""

    params: list[click.Parameter]
    examples: str | None

    def _install_examples(self, examples: str | None) -> None:
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples:
            self.params.append(_examples_option(self.examples))


class BankCommand(_ExamplesMixin, click.Command):
    """A command that accepts ``examples=``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)


class BankGroup(_ExamplesMixin, click.Group):
    """A group whose subcommands are BankCommands by default.

    ``@group.command(examples=...)`` therefore works without ``cls=``.
    """

    command_class = BankCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)
