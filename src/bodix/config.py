"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DATA_DIR = Path.home() / ".bodix"
DEFAULT_QUERY_TIMEOUT = 5.0


@dataclass(frozen=True)
class Settings:
    """Process configuration.

    User preferences (goal, unit, weight) are not configuration; they live
    in the settings store.
    """

    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str | None = None
    query_timeout: float = DEFAULT_QUERY_TIMEOUT


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build settings from BODIX_* environment variables."""
    env = os.environ if environ is None else environ

    data_dir = env.get("BODIX_DATA_DIR")
    timeout = env.get("BODIX_QUERY_TIMEOUT")

    try:
        query_timeout = float(timeout) if timeout else DEFAULT_QUERY_TIMEOUT
    except ValueError:
        raise ValueError(f"BODIX_QUERY_TIMEOUT must be a number of seconds, got {timeout!r}") from None
    if query_timeout <= 0:
        raise ValueError("BODIX_QUERY_TIMEOUT must be positive")

    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        log_level=env.get("BODIX_LOG_LEVEL") or None,
        query_timeout=query_timeout,
    )
