"""Goal, distance unit and weight commands."""

import click

from ..exceptions import BodixError
from ..models.settings import DistanceUnit
from .base import (
    async_command,
    build_aggregator,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
)


@click.group()
def goal():
    """Show or change the daily step goal."""
    pass


@goal.command("show")
@click.pass_context
@async_command
async def show_goal(ctx: click.Context):
    """Show the daily step goal."""
    ensure_initialized(ctx)
    aggregator = build_aggregator()
    click.echo(f"{await aggregator.get_daily_goal():,} steps")


@goal.command("set")
@click.argument("steps", type=int)
@click.pass_context
@async_command
async def set_goal(ctx: click.Context, steps: int):
    """Set the daily step goal (at least 1,000)."""
    ensure_initialized(ctx)
    aggregator = build_aggregator()

    try:
        await aggregator.set_daily_goal(steps)
    except BodixError as e:
        echo_error(str(e))
        ctx.exit(1)

    change = aggregator.pop_goal_change()
    direction = f" ({change.value})" if change else ""
    echo_success(f"Daily goal set to {steps:,} steps{direction}")

    # Today's standing against the new goal
    stats = await aggregator.fetch_today_stats()
    remaining = steps - stats.steps
    if remaining > 0:
        echo_info(f"{remaining:,} steps to go today")
    else:
        echo_info("Already reached today")


@click.group()
def unit():
    """Show or change the distance unit."""
    pass


@unit.command("show")
@click.pass_context
@async_command
async def show_unit(ctx: click.Context):
    """Show the distance unit."""
    ensure_initialized(ctx)
    aggregator = build_aggregator()
    click.echo((await aggregator.get_distance_unit()).title)


@unit.command("set")
@click.argument("value", type=click.Choice([u.value for u in DistanceUnit]))
@click.pass_context
@async_command
async def set_unit(ctx: click.Context, value: str):
    """Set the distance unit (km or miles)."""
    ensure_initialized(ctx)
    aggregator = build_aggregator()
    await aggregator.set_distance_unit(value)
    echo_success(f"Distance unit set to {DistanceUnit(value).title}")


@click.group()
def weight():
    """Show or change the body weight used for calories."""
    pass


@weight.command("show")
@click.pass_context
@async_command
async def show_weight(ctx: click.Context):
    """Show the body weight."""
    ensure_initialized(ctx)
    aggregator = build_aggregator()
    click.echo(f"{await aggregator.get_user_weight():.1f} kg")


@weight.command("set")
@click.argument("kg", type=float)
@click.pass_context
@async_command
async def set_weight(ctx: click.Context, kg: float):
    """Set the body weight in kg."""
    ensure_initialized(ctx)
    aggregator = build_aggregator()
    try:
        await aggregator.set_user_weight(kg)
    except BodixError as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Weight set to {kg:.1f} kg")
