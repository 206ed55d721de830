"""Shared pytest fixtures for Pomodesk tests."""

import os
import sys
import tempfile

# Must be set before pomodesk.settings computes its paths.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("POMODESK_HOME", tempfile.mkdtemp(prefix="pomodesk-test-"))

import pytest

from PyQt6.QtWidgets import QApplication

from pomodesk.database.db import configure_engine, init_db
from pomodesk.timer.engine import TimerEngine

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(qapp, clock):
    """Fresh TimerEngine on a fake clock with default durations."""
    return TimerEngine(parent=None, clock=clock)
