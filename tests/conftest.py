"""Shared pytest fixtures for Timekeeper tests."""

import sys

import pytest

from PyQt6.QtCore import QCoreApplication

from timekeeper.settings import Settings
from timekeeper.timer.engine import TimerEngine


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def settings_path(tmp_path, monkeypatch):
    """Keep every test away from the real settings file."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr("timekeeper.settings.SETTINGS_PATH", path)
    monkeypatch.setattr("timekeeper.settings.CONFIG_DIR", tmp_path)
    yield path


@pytest.fixture
def engine(qapp):
    """Fresh TimerEngine with default settings."""
    return TimerEngine(parent=None)


@pytest.fixture
def engine_strict(qapp):
    """TimerEngine that refuses to end while paused."""
    return TimerEngine(parent=None, settings=Settings(allow_end_while_paused=False))
