"""Record step samples."""

from datetime import datetime

import click

from ..clients.sample_log.client import SampleLogPedometer
from ..db import get_db_path
from .base import (
    async_command,
    echo_error,
    echo_success,
    echo_warning,
    ensure_initialized,
    get_data_dir,
)


@click.command("log")
@click.argument("steps", type=click.IntRange(min=0))
@click.option(
    "-d", "--distance", type=click.FloatRange(min=0), default=0.0, help="Meters walked"
)
@click.option(
    "--at",
    "recorded_at",
    type=click.DateTime(formats=["%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"]),
    help="When the steps were taken (default: now)",
)
@click.pass_context
@async_command
async def log_steps(
    ctx: click.Context, steps: int, distance: float, recorded_at: datetime | None
):
    """Record STEPS taken, optionally with distance and time."""
    ensure_initialized(ctx)

    pedometer = SampleLogPedometer(get_db_path(get_data_dir()))
    try:
        await pedometer.record(steps, distance, recorded_at)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    when = (recorded_at or datetime.now()).strftime("%Y-%m-%d %H:%M")
    echo_success(f"Logged {steps:,} steps ({distance:.0f} m) at {when}")
    if recorded_at and recorded_at > datetime.now():
        echo_warning("That time is in the future; the steps count once it has passed.")
