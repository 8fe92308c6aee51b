"""Database layer for bodix."""

from .engine import get_db_path, init_db
from .repositories import SettingsRepository, StepSampleRepository

__all__ = [
    "get_db_path",
    "init_db",
    "SettingsRepository",
    "StepSampleRepository",
]
