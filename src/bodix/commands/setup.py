"""Interactive preferences questionnaire."""

import math

import click
import questionary
from questionary import Style

from ..models.settings import MIN_DAILY_GOAL, DistanceUnit
from .base import async_command, build_aggregator, echo_info, echo_success, ensure_initialized

custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def _validate_goal(text: str) -> bool | str:
    try:
        value = int(text)
    except ValueError:
        return "Enter a whole number of steps"
    if value < MIN_DAILY_GOAL:
        return f"Goal must be at least {MIN_DAILY_GOAL:,} steps"
    return True


def _validate_weight(text: str) -> bool | str:
    try:
        value = float(text)
    except ValueError:
        return "Enter your weight in kg"
    return True if value > 0 and math.isfinite(value) else "Weight must be a positive number"


@click.command()
@click.pass_context
@async_command
async def setup(ctx: click.Context):
    """Walk through goal, distance unit and weight."""
    ensure_initialized(ctx)

    aggregator = build_aggregator()
    current = await aggregator.get_goal_config()

    click.echo("\n=== Step Tracking Preferences ===\n")

    goal_text = await questionary.text(
        "Daily step goal?",
        default=str(current.daily_step_goal),
        validate=_validate_goal,
        style=custom_style,
    ).ask_async()

    unit = await questionary.select(
        "Show distances in?",
        choices=[questionary.Choice(u.title, u) for u in DistanceUnit],
        default=current.distance_unit,
        style=custom_style,
    ).ask_async()

    weight_text = await questionary.text(
        "Body weight in kg? (used for calorie estimates)",
        default=f"{current.user_weight_kg:g}",
        validate=_validate_weight,
        style=custom_style,
    ).ask_async()

    # Ctrl+C in questionary returns None
    if goal_text is None or unit is None or weight_text is None:
        echo_info("Setup cancelled, nothing changed.")
        return

    goal = int(goal_text)
    weight = float(weight_text)

    if goal != current.daily_step_goal:
        await aggregator.set_daily_goal(goal)
    if unit != current.distance_unit:
        await aggregator.set_distance_unit(unit)
    if weight != current.user_weight_kg:
        await aggregator.set_user_weight(weight)

    echo_success(
        f"Goal {goal:,} steps, distances in {unit.symbol}, weight {weight:g} kg"
    )
