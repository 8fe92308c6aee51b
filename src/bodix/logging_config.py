"""Logging bootstrap.

Call ``setup_logging`` once at process start (the CLI does it in its
group callback). Library modules only create module-level loggers.
"""

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None, default: str = "WARNING") -> None:
    """Configure the root logger.

    Args:
        level: Explicit level name. Falls back to BODIX_LOG_LEVEL, then ``default``.
        default: Level used when nothing else is set.
    """
    log_level = (level or os.environ.get("BODIX_LOG_LEVEL") or default).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format=LOG_FORMAT,
    )
