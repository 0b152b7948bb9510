"""Smoke tests for the CLI entrypoint."""

from click.testing import CliRunner

from filesniff.cli import cli


def test_cli_help_displays_commands() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "filesniff identifies files by their content" in result.output
    for command in ("scan", "signatures", "config"):
        assert command in result.output


def test_scan_help_lists_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["scan", "--help"])

    assert result.exit_code == 0
    for option in ("--recursive", "--json", "--organize", "--sequential", "--signatures"):
        assert option in result.output
