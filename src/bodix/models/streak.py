"""Daily goal streak model."""

from dataclasses import dataclass
from datetime import date, timedelta


@dataclass(frozen=True)
class StreakState:
    """Consecutive days the daily goal has been met.

    Only the count and the last qualifying day are persisted; everything
    else is derived from them.
    """

    count: int = 0
    last_qualifying_date: date | None = None

    def counted_on(self, day: date) -> bool:
        """Whether the goal was already counted for this day."""
        return self.last_qualifying_date == day

    def register(self, day: date) -> "StreakState":
        """Return the state after the goal is met on ``day``.

        Same day -> unchanged, day after the last qualifying day -> +1,
        anything else (first time, or a gap) -> restart at 1.
        """
        if self.counted_on(day):
            return self
        if self.last_qualifying_date == day - timedelta(days=1):
            return StreakState(count=self.count + 1, last_qualifying_date=day)
        return StreakState(count=1, last_qualifying_date=day)

    def is_active(self, today: date) -> bool:
        """Whether the streak can still continue today.

        A streak stays alive while the last qualifying day is today or
        yesterday.
        """
        if self.last_qualifying_date is None or self.count == 0:
            return False
        return (today - self.last_qualifying_date).days <= 1
