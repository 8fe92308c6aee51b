"""Initialize project command."""

import click

from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success, get_data_dir


@click.command()
@async_command
async def init():
    """Initialize the bodix data directory and database.

    Creates the settings store and the step sample log. Safe to run again;
    existing data is kept.
    """
    data_dir = get_data_dir()
    echo_info(f"Initializing bodix in {data_dir}")

    db_path = get_db_path(data_dir)
    await init_db(db_path)
    echo_success(f"Database ready at {db_path}")

    click.echo()
    click.echo("Next steps:")
    click.echo("  bodix setup            # Goal, distance unit and weight")
    click.echo("  bodix log 1200 -d 900  # Record steps and meters walked")
    click.echo("  bodix today            # Progress toward today's goal")
