"""AppContext: the object every command receives via ``@click.pass_obj``.

It holds the resolved settings, opens the Bank the first time a command
needs it, and turns a ServiceResult into output plus an exit status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bankctl.config.logging import configure_logging
from bankctl.output.formatters import format_result

if TYPE_CHECKING:
    from bankctl.config.settings import BankSettings
    from bankctl.infrastructure.bank import Bank
    from bankctl.services.result import ServiceResult

FAILURE_EXIT_CODE = 1


class AppContext:
    """Per-invocation state shared by all commands.

    Logging is configured on construction.  The database is only touched
    when :attr:`bank` is first read, so ``--help``, ``--version`` and
    ``--examples`` never create a database file.
    """

    def __init__(self, settings: BankSettings) -> None:
        self.settings = settings
        self._bank: Bank | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def bank(self) -> Bank:
        if self._bank is None:
            from bankctl.infrastructure.bank import Bank

            self._bank = Bank(self.settings)
        return self._bank

    def close(self) -> None:
        """Dispose of the bank, if one was opened."""
        bank, self._bank = self._bank, None
        if bank is not None:
            bank.close()

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and exit non-zero if it failed.

        Successful output goes to stdout; warnings (text mode only, JSON
        already includes them) and failures go to stderr.
        """
        text = format_result(
            result, json_output=self.settings.json_output, quiet=self.settings.quiet
        )
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(FAILURE_EXIT_CODE)

        click.echo(text)
        if not self.settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
