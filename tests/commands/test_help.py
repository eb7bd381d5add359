"""Help and ``--examples`` output for every command."""

import pytest
from click.testing import CliRunner

from improved_markdown.cli import cli

COMMAND_PATHS = [
    ["path"],
    ["path", "resolve"],
    ["path", "relative"],
    ["path", "dirname"],
    ["path", "is-absolute"],
    ["secret"],
    ["secret", "encrypt"],
    ["secret", "decrypt"],
    ["render"],
]


@pytest.mark.parametrize("command", COMMAND_PATHS, ids=" ".join)
def test_help(cli_runner: CliRunner, command: list[str]) -> None:
    result = cli_runner.invoke(cli, [*command, "--help"])
    assert result.exit_code == 0
    assert "--examples" in result.output


@pytest.mark.parametrize("command", COMMAND_PATHS, ids=" ".join)
def test_examples(cli_runner: CliRunner, command: list[str]) -> None:
    result = cli_runner.invoke(cli, [*command, "--examples"])
    assert result.exit_code == 0
    assert "Examples for" in result.output
    assert f"imd {' '.join(command)}" in result.output


def test_examples_exit_before_arguments(cli_runner: CliRunner) -> None:
    """``--examples`` is eager: required arguments are not checked."""
    result = cli_runner.invoke(cli, ["path", "relative", "--examples"])
    assert result.exit_code == 0
    assert "imd path relative /a/b /a/c/d" in result.output
