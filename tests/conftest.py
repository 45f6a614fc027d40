"""Shared fixtures for the LocalWork test suite."""

import os
from pathlib import Path

# Keep test runs from writing JSON logs into the project tree. Must be set
# before settings are first loaded.
os.environ.setdefault("LOCALWORK_LOG_TO_FILE", "false")

import pytest  # noqa: E402

from localwork.files import GrantRegistry  # noqa: E402
from localwork.telemetry import configure_logging  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _configure_logging() -> None:
    """Configure logging once, as an entry point would."""
    configure_logging()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A granted working directory."""
    ws = tmp_path / "ws"
    ws.mkdir()
    return ws


@pytest.fixture
def registry(workspace: Path) -> GrantRegistry:
    """Registry with a single grant on the workspace."""
    reg = GrantRegistry()
    reg.grant(str(workspace))
    return reg
