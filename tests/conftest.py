"""Shared pytest fixtures.

Qt runs on the offscreen platform so the suite works without a display.
Each test gets its own settings directory, so nothing touches the user's
real settings.toml.
"""
from __future__ import annotations

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from settings import SETTINGS_DIR_ENV, reset_settings


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication once for all tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the settings singleton at a throwaway directory."""
    monkeypatch.setenv(SETTINGS_DIR_ENV, str(tmp_path / "settings"))
    reset_settings()
    yield
    reset_settings()
