"""Step statistics commands."""

import json

import click

from ..models.activity import WeeklySummary
from ..models.settings import ProgressLevel
from ..services.aggregator import BUCKET_HOURS
from ..services.display import (
    format_step_delta,
    format_steps,
    format_streak,
    goal_progress,
    progress_bar,
    progress_level,
    sparkline,
)
from .base import (
    async_command,
    build_aggregator,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
)

LEVEL_COLORS = {
    ProgressLevel.REACHED: "green",
    ProgressLevel.CLOSE: "yellow",
    ProgressLevel.IN_PROGRESS: "blue",
}


@click.command()
@click.option("--follow", is_flag=True, help="Keep printing as new steps arrive")
@click.pass_context
@async_command
async def today(ctx: click.Context, follow: bool):
    """Show today's steps, distance, calories and streak."""
    ensure_initialized(ctx)

    aggregator = build_aggregator()
    overview = await aggregator.fetch_overview()
    stats = overview.stats

    progress = goal_progress(stats.steps, overview.goal)
    level = progress_level(stats.steps, overview.goal)

    click.echo()
    click.echo(click.style("Today", bold=True))
    click.echo("=" * 40)
    click.echo(
        f"Steps: {format_steps(stats.steps)} of {format_steps(overview.goal)}  "
        + click.style(progress_bar(progress), fg=LEVEL_COLORS[level])
        + f" {progress * 100:.0f}%"
    )
    click.echo(f"Distance: {overview.unit.format(stats.distance_m)}")
    click.echo(f"Calories: {stats.calories:.0f} kcal")
    click.echo(f"{format_step_delta(stats.steps, overview.yesterday_steps)}")
    click.echo(f"Streak: {format_streak(overview.streak)}")

    if overview.goal_reached:
        echo_success("Daily goal reached!")

    if not follow:
        return

    click.echo()
    echo_info("Following live updates (Ctrl+C to stop)")
    async for live in aggregator.watch_today_stats():
        streak = await aggregator.update_streak_if_needed(live.steps)
        click.echo(
            f"{format_steps(live.steps)} steps, "
            f"{overview.unit.format(live.distance_m)}, "
            f"{live.calories:.0f} kcal, {format_streak(streak)}"
        )


@click.command()
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
@async_command
async def week(ctx: click.Context, output_format: str):
    """Show the last seven days and weekly totals."""
    ensure_initialized(ctx)

    aggregator = build_aggregator()
    records = await aggregator.fetch_weekly_steps()
    config = await aggregator.get_goal_config()
    unit = config.distance_unit

    if output_format == "json":
        click.echo(json.dumps(
            {"config": config.to_dict(), "days": [r.to_dict() for r in records]},
            indent=2,
        ))
        return

    rows = []
    for record in records:
        met = "yes" if record.steps >= config.daily_step_goal else ""
        rows.append([
            record.date.strftime("%a %Y-%m-%d"),
            format_steps(record.steps),
            unit.format(record.distance_m),
            f"{record.calories:.0f}",
            met,
        ])

    click.echo()
    click.echo(format_table(
        headers=["Day", "Steps", "Distance", "kcal", "Goal"],
        rows=rows,
    ))

    summary = WeeklySummary.from_records(records)
    click.echo()
    click.echo(click.style("Weekly Summary", bold=True))
    click.echo(f"  Steps: {format_steps(summary.steps)} (avg {summary.average_steps:,.0f}/day)")
    click.echo(f"  Distance: {unit.format(summary.distance_m)}")
    click.echo(f"  Calories: {summary.calories:.0f} kcal")


@click.command()
@click.pass_context
@async_command
async def hourly(ctx: click.Context):
    """Show today's steps in two-hour buckets."""
    ensure_initialized(ctx)

    aggregator = build_aggregator()
    buckets = await aggregator.fetch_hourly_steps()

    rows = [
        [
            f"{i * BUCKET_HOURS:02d}:00-{(i + 1) * BUCKET_HOURS:02d}:00",
            format_steps(steps),
        ]
        for i, steps in enumerate(buckets)
    ]

    click.echo()
    click.echo(format_table(headers=["Window", "Steps"], rows=rows))
    click.echo()
    click.echo(sparkline(buckets))


@click.command()
@click.pass_context
@async_command
async def streak(ctx: click.Context):
    """Show the stored goal streak without updating it."""
    ensure_initialized(ctx)

    aggregator = build_aggregator()
    state = await aggregator.get_streak()

    if not state.is_active(aggregator.today()):
        if state.last_qualifying_date:
            echo_info(
                f"Last goal day was {state.last_qualifying_date.isoformat()}; "
                "the streak restarts next time you reach your goal."
            )
        else:
            echo_info("No streak yet. Reach your daily goal to start one.")
        return

    click.echo(format_streak(state.count))
    click.echo(f"Last goal day: {state.last_qualifying_date.isoformat()}")
