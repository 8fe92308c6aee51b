"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from bodix.clients.memory.client import MemoryPedometer
from bodix.db import SettingsRepository, init_db
from bodix.services.aggregator import StepsAggregator

NOW = datetime(2026, 3, 10, 14, 30)


class FixedClock:
    """Settable stand-in for ``datetime.now``."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class CountingSettingsRepository(SettingsRepository):
    """Settings repository that records every write."""

    def __init__(self, db_path: Path):
        super().__init__(db_path)
        self.writes: list[dict[str, str]] = []

    async def set_many(self, values: dict[str, str]) -> None:
        self.writes.append(dict(values))
        await super().set_many(values)


@pytest.fixture
def temp_db_path():
    """Create a temporary, initialized database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        asyncio.run(init_db(db_path))
        yield db_path


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def settings(temp_db_path):
    return CountingSettingsRepository(temp_db_path)


@pytest.fixture
def pedometer(clock):
    return MemoryPedometer(clock=clock)


@pytest.fixture
def aggregator(settings, pedometer, clock):
    return StepsAggregator(settings, pedometer, clock=clock, query_timeout=1.0)
