"""Base protocol for pedometer data sources."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class AuthorizationStatus(str, Enum):
    """Motion data permission/availability as reported by the source."""

    AUTHORIZED = "authorized"
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    RESTRICTED = "restricted"
    UNAVAILABLE = "unavailable"  # no step counting hardware


@dataclass(frozen=True)
class PedometerData:
    """Cumulative steps and distance over a time window."""

    start: datetime
    end: datetime
    steps: int
    distance_m: float | None = None  # None when the source has no distance


@runtime_checkable
class PedometerSource(Protocol):
    """Protocol for step data sources."""

    poll_interval: float

    @property
    def source_name(self) -> str:
        """Return the name of this data source."""
        ...

    @property
    def supports_sub_day(self) -> bool:
        """Whether windows shorter than a day return meaningful counts."""
        ...

    async def authorization_status(self) -> AuthorizationStatus:
        """Current permission state."""
        ...

    async def query(self, start: datetime, end: datetime) -> PedometerData | None:
        """Cumulative steps and distance over [start, end).

        Returns None when the source has no data for the window.
        """
        ...

    def stream_updates(self, start: datetime) -> AsyncIterator[PedometerData | None]:
        """Live cumulative counts from ``start`` to now, one per poll."""
        ...


class BasePedometerSource(ABC):
    """Base class for pedometer sources with common functionality."""

    poll_interval: float = 1.0

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the name of this data source."""
        pass

    @property
    def supports_sub_day(self) -> bool:
        return True

    async def authorization_status(self) -> AuthorizationStatus:
        return AuthorizationStatus.AUTHORIZED

    @abstractmethod
    async def query(self, start: datetime, end: datetime) -> PedometerData | None:
        """Cumulative steps and distance over [start, end)."""
        pass

    def now(self) -> datetime:
        return datetime.now()

    async def stream_updates(self, start: datetime) -> AsyncIterator[PedometerData | None]:
        """Query [start, now) every ``poll_interval`` seconds and yield each reading.

        Polls with no data yield None. An error from ``query`` ends the
        stream.
        """
        while True:
            yield await self.query(start, self.now())
            await asyncio.sleep(self.poll_interval)
