"""CLI commands for bodix."""

from .init import init
from .log import log_steps
from .preferences import goal, unit, weight
from .setup import setup
from .stats import hourly, streak, today, week

__all__ = [
    "goal",
    "hourly",
    "init",
    "log_steps",
    "setup",
    "streak",
    "today",
    "unit",
    "week",
    "weight",
]
