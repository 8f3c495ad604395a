"""
Pytest fixtures for envbind tests. Keeps os.environ free of the keys the tests use.
"""

from __future__ import annotations

import pytest

TEST_KEYS = (
    "SOMESTRING",
    "DB_HOST",
    "PORT",
    "COUNTRIES",
    "RATE",
    "NUMBERS",
    "NOTNUMBERS",
    "INTENT",
    "PORTS",
    "PROD",
    "DEV",
    "HOSTS",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Unset every key the tests bind so results do not depend on the host environment."""
    for key in TEST_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
