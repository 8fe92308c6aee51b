"""Pedometer data sources."""

from .base import AuthorizationStatus, BasePedometerSource, PedometerData, PedometerSource
from .memory.client import MemoryPedometer
from .sample_log.client import SampleLogPedometer

__all__ = [
    "AuthorizationStatus",
    "BasePedometerSource",
    "MemoryPedometer",
    "PedometerData",
    "PedometerSource",
    "SampleLogPedometer",
]
