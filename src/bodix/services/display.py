"""Text helpers shared by the command-line screens."""

from ..models.settings import ProgressLevel


def goal_progress(steps: int, goal: int) -> float:
    """Fraction of the goal reached, clamped to [0, 1]."""
    if goal <= 0:
        return 0.0
    return max(0.0, min(steps / goal, 1.0))


def progress_level(steps: int, goal: int) -> ProgressLevel:
    return ProgressLevel.for_progress(goal_progress(steps, goal))


def format_steps(steps: int) -> str:
    """Thousands-separated step count."""
    return f"{steps:,}"


def format_step_delta(today: int, yesterday: int) -> str:
    """Day-over-day change, e.g. '+1,250 vs yesterday'."""
    diff = today - yesterday
    sign = "+" if diff >= 0 else "-"
    return f"{sign}{abs(diff):,} vs yesterday"


def format_streak(streak: int) -> str:
    if streak <= 0:
        return "No streak yet"
    return f"{streak} day streak"


def progress_bar(progress: float, width: int = 20) -> str:
    """ASCII progress bar."""
    filled = round(progress * width)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def sparkline(values: list[int]) -> str:
    """Compact bar chart for bucket counts."""
    bars = " ▁▂▃▄▅▆▇█"
    peak = max(values, default=0)
    if peak == 0:
        return bars[0] * len(values)
    return "".join(bars[round(v / peak * (len(bars) - 1))] for v in values)
