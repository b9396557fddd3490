"""Shared fixtures for CLI command tests.

Common fixtures available from parent conftest.py:
- cli_runner: Click CLI test runner (from tests/conftest.py)
- temp_dir: Temporary directory for test files (from tests/conftest.py)
- clean_env: Clean environment without OUTRIDER_ vars (from tests/conftest.py)
- sample_config_yaml: Sample YAML config content (from tests/conftest.py)
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture
def project_dir(temp_dir: Path, clean_env: None) -> Path:
    """Run the CLI from an empty project directory with a clean environment."""
    os.chdir(temp_dir)
    return temp_dir
