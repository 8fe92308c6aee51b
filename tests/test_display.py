"""Tests for display helpers."""

import pytest

from bodix.models.settings import ProgressLevel
from bodix.services.display import (
    format_step_delta,
    format_steps,
    format_streak,
    goal_progress,
    progress_bar,
    progress_level,
    sparkline,
)


class TestProgress:
    """Tests for goal progress."""

    @pytest.mark.parametrize(
        "steps, goal, expected",
        [
            (0, 10000, 0.0),
            (5000, 10000, 0.5),
            (10000, 10000, 1.0),
            (25000, 10000, 1.0),
            (500, 0, 0.0),
        ],
    )
    def test_goal_progress(self, steps, goal, expected):
        assert goal_progress(steps, goal) == expected

    def test_progress_level(self):
        assert progress_level(7500, 10000) is ProgressLevel.CLOSE
        assert progress_level(12000, 10000) is ProgressLevel.REACHED
        assert progress_level(100, 10000) is ProgressLevel.IN_PROGRESS

    def test_progress_bar(self):
        assert progress_bar(0.5, width=10) == "[#####-----]"
        assert progress_bar(1.0, width=4) == "[####]"
        assert progress_bar(0.0, width=4) == "[----]"


class TestFormatting:
    """Tests for text formatting."""

    def test_format_steps(self):
        assert format_steps(12345) == "12,345"
        assert format_steps(0) == "0"

    def test_step_delta(self):
        assert format_step_delta(6250, 5000) == "+1,250 vs yesterday"
        assert format_step_delta(4500, 5000) == "-500 vs yesterday"
        assert format_step_delta(0, 0) == "+0 vs yesterday"

    def test_streak(self):
        assert format_streak(0) == "No streak yet"
        assert format_streak(3) == "3 day streak"

    def test_sparkline(self):
        line = sparkline([0, 4, 8])
        assert len(line) == 3
        assert line[0] == " "
        assert line[-1] == "█"

    def test_sparkline_all_zero(self):
        assert sparkline([0] * 12) == " " * 12
