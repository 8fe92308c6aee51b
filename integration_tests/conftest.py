"""Pytest configuration for integration tests.

These tests run the aggregator against the SQLite sample log instead of the
in-memory pedometer.
"""

import asyncio
from datetime import datetime, timedelta

import pytest

from bodix.clients.sample_log.client import SampleLogPedometer
from bodix.db import SettingsRepository, get_db_path, init_db
from bodix.services.aggregator import StepsAggregator


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.path):
            item.add_marker(pytest.mark.integration)


class SteppingClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def next_day(self, hour: int = 21) -> None:
        self.now = (self.now + timedelta(days=1)).replace(hour=hour, minute=0)


@pytest.fixture
def db_path(tmp_path):
    path = get_db_path(tmp_path / "data")
    asyncio.run(init_db(path))
    return path


@pytest.fixture
def clock():
    return SteppingClock(datetime(2026, 5, 4, 21, 0))


@pytest.fixture
def source(db_path, clock):
    pedometer = SampleLogPedometer(db_path, poll_interval=0.01)
    pedometer.now = clock
    return pedometer


@pytest.fixture
def aggregator(db_path, source, clock):
    return StepsAggregator(SettingsRepository(db_path), source, clock=clock)
