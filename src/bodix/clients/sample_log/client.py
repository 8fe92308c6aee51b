"""Pedometer source reading samples logged in the bodix database."""

import logging
from datetime import datetime
from pathlib import Path

from ...db.repositories import StepSampleRepository
from ..base import AuthorizationStatus, BasePedometerSource, PedometerData

logger = logging.getLogger(__name__)


class SampleLogPedometer(BasePedometerSource):
    """Pedometer over the ``step_samples`` table.

    Samples are added with ``bodix log`` or ``record``; queries sum the
    samples falling inside the requested window.
    """

    def __init__(self, db_path: Path | None = None, poll_interval: float = 5.0):
        self.samples = StepSampleRepository(db_path)
        self.poll_interval = poll_interval

    @property
    def source_name(self) -> str:
        return "sample_log"

    async def authorization_status(self) -> AuthorizationStatus:
        if not Path(self.samples.db_path).exists():
            return AuthorizationStatus.UNAVAILABLE
        return AuthorizationStatus.AUTHORIZED

    async def record(
        self, steps: int, distance_m: float = 0.0, recorded_at: datetime | None = None
    ) -> int:
        """Log a sample, stamped now unless ``recorded_at`` is given."""
        return await self.samples.add(recorded_at or self.now(), steps, distance_m)

    async def query(self, start: datetime, end: datetime) -> PedometerData | None:
        steps, distance_m, count = await self.samples.sum_between(start, end)
        if count == 0:
            logger.debug("No samples between %s and %s", start, end)
            return None
        return PedometerData(start=start, end=end, steps=steps, distance_m=distance_m)
