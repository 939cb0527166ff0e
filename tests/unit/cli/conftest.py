"""Fixtures for CLI tests."""

import os
from pathlib import Path

import pytest


@pytest.fixture
def cli_env(monkeypatch, tmp_path: Path, reset_datepicker_logger) -> Path:
    """Run the CLI in an empty directory with its own user config directory."""
    for name in list(os.environ):
        if name.upper().startswith("DATEPICKER_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATEPICKER_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("DATEPICKER_DATA_DIR", str(tmp_path / "data"))
    return tmp_path
