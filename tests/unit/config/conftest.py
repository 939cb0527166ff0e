"""Fixtures for settings tests."""

import os
from pathlib import Path

import pytest


@pytest.fixture
def isolated_env(monkeypatch, tmp_path: Path) -> Path:
    """Run in an empty directory with no DATEPICKER_ environment variables."""
    for name in list(os.environ):
        if name.upper().startswith("DATEPICKER_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config_dir(isolated_env: Path) -> Path:
    """User config directory inside the test directory."""
    path = isolated_env / "config"
    path.mkdir()
    return path
