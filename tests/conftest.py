"""
Shared pytest fixtures for scriptlayer tests.

This module provides common fixtures including:
- SQLite contact databases (populated and empty) behind a content resolver
- Fake platform backends (speech, bluetooth, telephony)
- Registry singleton reset between tests
"""

import os
import sqlite3
import sys
from typing import Callable, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scriptlayer.modules.content import SqliteContentResolver
from scriptlayer.modules.facades import PlatformContext
from scriptlayer.modules.registry import reset_facade_configuration


# =============================================================================
# Contacts Database
# =============================================================================

PEOPLE_SCHEMA = """
    CREATE TABLE people (
        _id INTEGER PRIMARY KEY,
        name TEXT,
        primary_phone TEXT,
        primary_email TEXT,
        type INTEGER,
        notes TEXT
    )
"""

SAMPLE_PEOPLE = [
    (1, "Ada Lovelace", "555-0101", "ada@example.com", 1, None),
    (2, "Alan Turing", "555-0102", "alan@example.com", 2, "bletchley"),
    (3, "Grace Hopper", None, "grace@example.com", 1, None),
]


def _create_people_db(path: str, rows: List[tuple]) -> str:
    conn = sqlite3.connect(path)
    try:
        conn.execute(PEOPLE_SCHEMA)
        conn.executemany("INSERT INTO people VALUES (?, ?, ?, ?, ?, ?)", rows)
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def contacts_db(tmp_path) -> str:
    """SQLite database with a populated people table."""
    return _create_people_db(str(tmp_path / "contacts.db"), SAMPLE_PEOPLE)


@pytest.fixture
def empty_contacts_db(tmp_path) -> str:
    """SQLite database with an empty people table."""
    return _create_people_db(str(tmp_path / "empty.db"), [])


@pytest.fixture
def content_resolver(contacts_db):
    """Content resolver over the populated contacts database."""
    resolver = SqliteContentResolver(contacts_db, authorities=["contacts"])
    yield resolver
    resolver.close()


@pytest.fixture
def empty_content_resolver(empty_contacts_db):
    """Content resolver over an empty contacts database."""
    resolver = SqliteContentResolver(empty_contacts_db, authorities=["contacts"])
    yield resolver
    resolver.close()


# =============================================================================
# Platform Backend Fakes
# =============================================================================

class FakeTelephony:
    """Telephony backend that lets tests push signal strength readings."""

    def __init__(self):
        self.callback: Optional[Callable[[Dict[str, int]], None]] = None
        self.listen_calls = 0
        self.stop_calls = 0

    def listen_signal_strengths(self, callback):
        self.callback = callback
        self.listen_calls += 1

    def stop_listening(self):
        self.callback = None
        self.stop_calls += 1

    def push(self, strengths: Dict[str, int]) -> None:
        if self.callback is not None:
            self.callback(strengths)


@pytest.fixture
def speech_engine():
    """Mock text-to-speech engine."""
    engine = MagicMock()
    engine.is_speaking.return_value = False
    return engine


@pytest.fixture
def bluetooth_adapter():
    """Mock bluetooth adapter that starts disabled."""
    adapter = MagicMock()
    adapter.is_enabled.return_value = False
    adapter.get_remote_device_name.return_value = "Headset"
    return adapter


@pytest.fixture
def telephony():
    return FakeTelephony()


@pytest.fixture
def platform_context(content_resolver, speech_engine, bluetooth_adapter, telephony):
    """Platform context with every backend available."""
    return PlatformContext(
        content_resolver=content_resolver,
        speech_engine=speech_engine,
        bluetooth_adapter=bluetooth_adapter,
        telephony=telephony,
    )


# =============================================================================
# Registry
# =============================================================================

@pytest.fixture(autouse=True)
def reset_registry():
    """Make sure no test sees another test's process-wide registry."""
    reset_facade_configuration()
    yield
    reset_facade_configuration()


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "concurrency: Tests that exercise multiple threads"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take a long time to run"
    )
