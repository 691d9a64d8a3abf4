"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from ghostcell import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate every test from GHOSTCELL_* variables and cached settings."""
    monkeypatch.delenv("GHOSTCELL_STRATEGY", raising=False)
    monkeypatch.delenv("GHOSTCELL_WARN_ON_DIRTY_DISCARD", raising=False)
    reset_settings()
    yield
    reset_settings()


class CountingDuplicator:
    """Shallow list duplicator that records how often it ran."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, value):
        self.calls += 1
        return list(value) if isinstance(value, list) else value


@pytest.fixture
def counting_duplicator():
    """Fresh CountingDuplicator."""
    return CountingDuplicator()
