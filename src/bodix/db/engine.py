"""Database engine setup and initialization."""

import logging
from pathlib import Path

import aiosqlite

from ..config import load_settings

logger = logging.getLogger(__name__)

DB_FILENAME = "bodix.db"


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = load_settings().data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DB_FILENAME


async def _run_migrations(db: aiosqlite.Connection) -> None:
    """Run database migrations for schema updates."""
    cursor = await db.execute("PRAGMA table_info(step_samples)")
    columns = await cursor.fetchall()
    sample_columns = {col[1] for col in columns}

    # Older logs only stored step counts
    if "distance_m" not in sample_columns:
        await db.execute("ALTER TABLE step_samples ADD COLUMN distance_m REAL DEFAULT 0")

    await db.commit()


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Process-wide key/value preferences and streak state
        await db.execute("""
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Raw pedometer samples recorded by the sample log source
        await db.execute("""
            CREATE TABLE IF NOT EXISTS step_samples (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                recorded_at TIMESTAMP NOT NULL,
                steps INTEGER NOT NULL,
                distance_m REAL DEFAULT 0
            )
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_step_samples_recorded_at
            ON step_samples(recorded_at)
        """)

        await db.commit()

        await _run_migrations(db)

    logger.debug("Database ready at %s", db_path)
