from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from click.testing import CliRunner


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for test environment.

    This fixture runs automatically for all tests to ensure logging
    is properly configured to output to stderr (not stdout) and
    suppress debug output from the condition compiler during tests.
    """
    from outrider.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files.

    Also saves and restores the current working directory to prevent
    tests that use os.chdir() from affecting other tests.
    """
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env(temp_dir: Path) -> Generator[None, None, None]:
    """Remove all OUTRIDER_ environment variables for clean testing.

    HOME is pointed at the temporary directory so a user config file on
    the machine running the tests is never read.
    """
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("OUTRIDER_"):
            del os.environ[key]
    os.environ["HOME"] = str(temp_dir / "home")
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def sample_config_yaml() -> str:
    """Return sample outrider.yaml content for testing."""
    return """
expressions:
  max_line_length: 150
  break_threshold: 90
  paren_break_threshold: 60

verbosity: "info"
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner.

    Returns:
        CliRunner instance for testing Click commands.

    Example:
        >>> def test_version(cli_runner):
        ...     from outrider.main import cli
        ...     result = cli_runner.invoke(cli, ["--version"])
        ...     assert result.exit_code == 0
    """
    from click.testing import CliRunner

    return CliRunner()
