"""Entry point: ``bankctl`` and its global options."""

from __future__ import annotations

from pathlib import Path

import click

from bankctl import __version__
from bankctl.commands import register_commands
from bankctl.commands._context import AppContext
from bankctl.config.settings import BankSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="bankctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the status line on success.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Read this TOML file instead of discovering bankctl.toml.",
)
@click.option(
    "--data-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the database (default: the config file's directory or CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    data_root: Path | None,
) -> None:
    """bankctl — users, accounts and the transactions between them."""
    app = AppContext(
        BankSettings.from_cli(
            config_path=config_path,
            data_root=data_root,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
