"""Tests for the root group, --help, --version and --examples."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from bankctl import __version__
from bankctl.cli import cli

EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["user", "--examples"], ["bankctl user create", "bankctl user show"]),
    (["user", "create", "--examples"], ["--birth-date", "--user-id"]),
    (["user", "delete", "--examples"], ["bankctl user delete"]),
    (["account", "--examples"], ["bankctl account create", "bankctl account delete"]),
    (["account", "create", "--examples"], ["--dispo 500"]),
    (["transaction", "--examples"], ["bankctl transaction list"]),
    (["transaction", "create", "--examples"], ["--transaction-id"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a for a in args if a != "--examples")


class TestRootGroup:
    def test_no_command_shows_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage:" in result.output
        for group in ("user", "account", "transaction"):
            assert group in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    @pytest.mark.parametrize("group", ["user", "account", "transaction"])
    def test_group_help(self, cli_runner: CliRunner, group: str) -> None:
        result = cli_runner.invoke(cli, [group, "--help"])
        assert result.exit_code == 0
        assert "--examples" in result.output


@pytest.mark.parametrize("item", EXAMPLES_COMMANDS, ids=_examples_id)
def test_examples(cli_runner: CliRunner, item: tuple[list[str], list[str]]) -> None:
    args, keywords = item
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output
