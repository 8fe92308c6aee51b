"""Daily activity models and the calorie estimate."""

from dataclasses import dataclass
from datetime import date

# kcal per km per kg of body weight
CALORIES_PER_KM_KG = 0.9


def calories_for_distance(distance_m: float, weight_kg: float) -> float:
    """Estimate calories burned walking a distance.

    This is a rough walking approximation (distance_km * weight_kg * 0.9),
    not a clinical measurement. Every calorie figure shown comes from here.
    """
    return (distance_m / 1000) * weight_kg * CALORIES_PER_KM_KG


@dataclass(frozen=True)
class TodayStats:
    """Steps, distance and calories accumulated so far today."""

    steps: int = 0
    distance_m: float = 0.0
    calories: float = 0.0


@dataclass(frozen=True)
class DailyRecord:
    """Aggregate activity for one calendar day."""

    date: date
    steps: int = 0
    distance_m: float = 0.0
    calories: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for output."""
        return {
            "date": self.date.isoformat(),
            "steps": self.steps,
            "distance_m": self.distance_m,
            "calories": self.calories,
        }


@dataclass(frozen=True)
class WeeklySummary:
    """Totals over a run of daily records."""

    steps: int
    distance_m: float
    calories: float
    days: int

    @property
    def average_steps(self) -> float:
        """Mean steps per day, 0 for an empty summary."""
        if self.days == 0:
            return 0.0
        return self.steps / self.days

    @classmethod
    def from_records(cls, records: list[DailyRecord]) -> "WeeklySummary":
        """Sum steps, distance and calories across records."""
        return cls(
            steps=sum(r.steps for r in records),
            distance_m=sum(r.distance_m for r in records),
            calories=sum(r.calories for r in records),
            days=len(records),
        )
