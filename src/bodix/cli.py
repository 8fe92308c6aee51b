"""CLI entry point for bodix."""

import click

from . import __version__
from .commands import goal, hourly, init, log_steps, setup, streak, today, unit, week, weight
from .logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="bodix")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (default: BODIX_LOG_LEVEL or WARNING)",
)
def main(log_level: str | None):
    """bodix: daily step goals and streaks.

    Log steps, track progress toward a daily goal, and keep a streak of
    days the goal was met.

    Example usage:

        # Create the database
        bodix init

        # Record a walk
        bodix log 4200 --distance 3100

        # Check today's progress and the last week
        bodix today
        bodix week

        # Change the goal
        bodix goal set 8000
    """
    setup_logging(log_level)


# Register commands
main.add_command(init)
main.add_command(log_steps)
main.add_command(today)
main.add_command(week)
main.add_command(hourly)
main.add_command(streak)
main.add_command(goal)
main.add_command(unit)
main.add_command(weight)
main.add_command(setup)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
