"""Shared test fixtures."""

from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def resources_path() -> Path:
    """Fixture for the resources directory path."""
    return Path(__file__).parent / "resources"


@pytest.fixture
def in_tmp_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with a fresh temporary directory as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def minimal_metalfile_data() -> dict[str, Any]:
    """Smallest valid Metalfile, as parsed data."""
    return {
        "package": {
            "name": "app",
            "version": "1.0.0",
            "architecture": "all",
            "description": "d",
        },
        "files": [{"src": "a", "dest": "/b"}],
    }
