"""Data models for bodix."""

from .activity import DailyRecord, TodayStats, WeeklySummary, calories_for_distance
from .settings import DistanceUnit, GoalChangeType, GoalConfig, ProgressLevel
from .streak import StreakState

__all__ = [
    "calories_for_distance",
    "DailyRecord",
    "DistanceUnit",
    "GoalChangeType",
    "GoalConfig",
    "ProgressLevel",
    "StreakState",
    "TodayStats",
    "WeeklySummary",
]
