"""In-memory pedometer for embedding hosts and tests."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from ..base import AuthorizationStatus, BasePedometerSource, PedometerData


@dataclass(frozen=True)
class StepSample:
    """Steps and distance recorded at an instant."""

    recorded_at: datetime
    steps: int
    distance_m: float = 0.0


class MemoryPedometer(BasePedometerSource):
    """Pedometer backed by a list of timestamped samples.

    Every query window is remembered in ``queries`` so callers can check
    which windows were actually requested.
    """

    def __init__(
        self,
        status: AuthorizationStatus = AuthorizationStatus.AUTHORIZED,
        sub_day: bool = True,
        latency: float = 0.0,
        clock: Callable[[], datetime] | None = None,
    ):
        self.status = status
        self.sub_day = sub_day
        self.latency = latency
        self.clock = clock or datetime.now
        self.samples: list[StepSample] = []
        self.queries: list[tuple[datetime, datetime]] = []

    @property
    def source_name(self) -> str:
        return "memory"

    @property
    def supports_sub_day(self) -> bool:
        return self.sub_day

    def now(self) -> datetime:
        return self.clock()

    def record(self, recorded_at: datetime, steps: int, distance_m: float = 0.0) -> None:
        """Add a sample."""
        if steps < 0 or distance_m < 0:
            raise ValueError("Steps and distance must be non-negative")
        self.samples.append(StepSample(recorded_at, steps, distance_m))

    async def authorization_status(self) -> AuthorizationStatus:
        return self.status

    async def query(self, start: datetime, end: datetime) -> PedometerData | None:
        self.queries.append((start, end))
        if self.latency:
            await asyncio.sleep(self.latency)

        matching = [s for s in self.samples if start <= s.recorded_at < end]
        if not matching:
            return None

        return PedometerData(
            start=start,
            end=end,
            steps=sum(s.steps for s in matching),
            distance_m=sum(s.distance_m for s in matching),
        )
