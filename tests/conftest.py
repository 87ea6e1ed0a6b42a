"""Pytest configuration and fixtures."""

import logging

import pytest

from signed_url_store.clock import TestClock


def pytest_configure(config: pytest.Config) -> None:
    """Keep driver chatter out of captured logs."""
    for name in ["aiosqlite", "sqlalchemy.engine"]:
        logging.getLogger(name).setLevel(logging.WARNING)


@pytest.fixture
def clock() -> TestClock:
    """A deterministic clock starting at the current second."""
    return TestClock()
