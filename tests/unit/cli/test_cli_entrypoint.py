"""Unit tests for global CLI options and entrypoint in main.py.

Tests global options functionality:
- --config option for specifying custom config file
- --verbose stacking (-v, -vv) for verbosity levels
- --quiet flag for suppressing non-essential output
- --version and --help output
- Precedence rules (quiet takes precedence over verbose)
"""

from __future__ import annotations

import logging
from pathlib import Path

from click.testing import CliRunner

from outrider import __version__
from outrider.main import cli


def test_version(cli_runner: CliRunner, project_dir: Path) -> None:
    result = cli_runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert f"outrider, version {__version__}" in result.stdout


def test_no_subcommand_shows_help(cli_runner: CliRunner, project_dir: Path) -> None:
    result = cli_runner.invoke(cli, [])

    assert result.exit_code == 0
    assert "Usage:" in result.stdout
    assert "condition" in result.stdout


def test_config_option_loads_custom_file(
    cli_runner: CliRunner, project_dir: Path
) -> None:
    """Test that --config option changes the line width used for output."""
    custom_config = project_dir / "custom.yaml"
    custom_config.write_text(
        "expressions:\n  max_line_length: 40\n  break_threshold: 20\n"
    )

    result = cli_runner.invoke(
        cli,
        ["--config", str(custom_config), "condition", "command", "bot", "-e", "issues"],
    )

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "(github.event_name == 'issues') &&",
        "(contains(github.event.issue.body, '/bot'))",
    ]


def test_invalid_config_exits_with_error(
    cli_runner: CliRunner, project_dir: Path
) -> None:
    (project_dir / "outrider.yaml").write_text("expressions:\n  max_line_length: 5\n")

    result = cli_runner.invoke(cli, ["condition", "parse", "a"])

    assert result.exit_code == 1
    assert "Error: Invalid configuration" in result.stderr
    assert "Field: expressions.max_line_length" in result.stderr


def test_verbose_sets_debug_level(cli_runner: CliRunner, project_dir: Path) -> None:
    result = cli_runner.invoke(cli, ["-vv", "condition", "parse", "a"])

    assert result.exit_code == 0
    assert logging.getLogger().level == logging.DEBUG


def test_single_verbose_sets_info_level(
    cli_runner: CliRunner, project_dir: Path
) -> None:
    result = cli_runner.invoke(cli, ["-v", "condition", "parse", "a"])

    assert result.exit_code == 0
    assert logging.getLogger().level == logging.INFO


def test_quiet_takes_precedence(cli_runner: CliRunner, project_dir: Path) -> None:
    result = cli_runner.invoke(cli, ["-q", "-vv", "condition", "parse", "a"])

    assert result.exit_code == 0
    assert logging.getLogger().level == logging.ERROR


def test_config_verbosity_used_by_default(
    cli_runner: CliRunner, project_dir: Path
) -> None:
    (project_dir / "outrider.yaml").write_text("verbosity: info\n")

    result = cli_runner.invoke(cli, ["condition", "parse", "a"])

    assert result.exit_code == 0
    assert logging.getLogger().level == logging.INFO
