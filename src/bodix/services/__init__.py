"""Services for bodix."""

from .aggregator import DailyOverview, StepsAggregator

__all__ = ["DailyOverview", "StepsAggregator"]
