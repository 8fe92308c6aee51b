"""Shared CLI utilities."""

import asyncio
from functools import wraps
from pathlib import Path

import click

from ..clients.sample_log.client import SampleLogPedometer
from ..config import load_settings
from ..db import SettingsRepository, get_db_path
from ..services.aggregator import StepsAggregator


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_data_dir() -> Path:
    """Get the data directory path."""
    return load_settings().data_dir


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path(get_data_dir())
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'bodix init' first."
        )
        ctx.exit(1)


def build_aggregator() -> StepsAggregator:
    """Aggregator over the sample log in the configured data directory."""
    settings = load_settings()
    db_path = get_db_path(settings.data_dir)
    return StepsAggregator(
        settings=SettingsRepository(db_path),
        source=SampleLogPedometer(db_path),
        query_timeout=settings.query_timeout,
    )


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)).rstrip()]
    lines.append("".join("-" * w + " " * padding for w in widths).rstrip())
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)).rstrip()
        )

    return "\n".join(lines)
