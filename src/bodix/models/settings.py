"""User preference models: daily goal, distance unit and body weight."""

from dataclasses import dataclass
from enum import Enum

DEFAULT_DAILY_GOAL = 10_000
MIN_DAILY_GOAL = 1_000
DEFAULT_WEIGHT_KG = 70.0

METERS_PER_KM = 1000
METERS_PER_MILE = 1609.34


class DistanceUnit(str, Enum):
    """Unit used to display distances."""

    KM = "km"
    MILES = "miles"

    @property
    def title(self) -> str:
        """Human readable name for pickers."""
        if self is DistanceUnit.MILES:
            return "Miles (mi)"
        return "Kilometers (km)"

    @property
    def symbol(self) -> str:
        return "mi" if self is DistanceUnit.MILES else "km"

    def convert(self, meters: float) -> float:
        """Convert meters into this unit."""
        if self is DistanceUnit.MILES:
            return meters / METERS_PER_MILE
        return meters / METERS_PER_KM

    def format(self, meters: float) -> str:
        """Format a distance in meters, e.g. '3.20 km'."""
        return f"{self.convert(meters):.2f} {self.symbol}"


class GoalChangeType(str, Enum):
    """Direction of the most recent goal update."""

    INCREASED = "increased"
    DECREASED = "decreased"


class ProgressLevel(str, Enum):
    """Coarse progress bands toward the daily goal."""

    IN_PROGRESS = "in_progress"
    CLOSE = "close"  # more than 70% of the goal
    REACHED = "reached"

    @classmethod
    def for_progress(cls, progress: float) -> "ProgressLevel":
        """Pick the band for a progress fraction."""
        if progress >= 1:
            return cls.REACHED
        if progress > 0.7:
            return cls.CLOSE
        return cls.IN_PROGRESS


@dataclass(frozen=True)
class GoalConfig:
    """Snapshot of the persisted user preferences."""

    daily_step_goal: int = DEFAULT_DAILY_GOAL
    distance_unit: DistanceUnit = DistanceUnit.KM
    user_weight_kg: float = DEFAULT_WEIGHT_KG

    def to_dict(self) -> dict:
        """Convert to dictionary for output."""
        return {
            "daily_step_goal": self.daily_step_goal,
            "distance_unit": self.distance_unit.value,
            "user_weight_kg": self.user_weight_kg,
        }
