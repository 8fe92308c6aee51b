"""Data access layer for bodix."""

import logging
from datetime import datetime
from pathlib import Path

import aiosqlite

from .engine import get_db_path

logger = logging.getLogger(__name__)


class SettingsRepository:
    """Durable key/value store for preferences and streak state.

    Values are stored as text; callers own the encoding. Keys are global to
    the database file.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, key: str) -> str | None:
        """Get the raw value for a key, or None if unset."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("SELECT value FROM settings WHERE key = ?", (key,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return row[0]

    async def get_many(self, keys: list[str]) -> dict[str, str]:
        """Get several keys at once. Missing keys are left out."""
        if not keys:
            return {}
        placeholders = ",".join("?" for _ in keys)
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                f"SELECT key, value FROM settings WHERE key IN ({placeholders})",
                tuple(keys),
            )
            rows = await cursor.fetchall()
            return {row[0]: row[1] for row in rows}

    async def set(self, key: str, value: str) -> None:
        """Insert or replace a single key."""
        await self.set_many({key: value})

    async def set_many(self, values: dict[str, str]) -> None:
        """Insert or replace several keys in one transaction."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.executemany(
                """
                INSERT INTO settings (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                list(values.items()),
            )
            await db.commit()
        logger.debug("Stored settings: %s", ", ".join(values))


class StepSampleRepository:
    """Repository for raw step samples."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def add(self, recorded_at: datetime, steps: int, distance_m: float = 0.0) -> int:
        """Store a sample."""
        if steps < 0 or distance_m < 0:
            raise ValueError("Steps and distance must be non-negative")

        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO step_samples (recorded_at, steps, distance_m)
                VALUES (?, ?, ?)
                """,
                (recorded_at.isoformat(), steps, distance_m),
            )
            await db.commit()
            return cursor.lastrowid

    async def sum_between(self, start: datetime, end: datetime) -> tuple[int, float, int]:
        """Total steps and distance recorded in [start, end).

        Returns:
            (steps, distance_m, sample_count)
        """
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT COALESCE(SUM(steps), 0), COALESCE(SUM(distance_m), 0), COUNT(*)
                FROM step_samples
                WHERE recorded_at >= ? AND recorded_at < ?
                """,
                (start.isoformat(), end.isoformat()),
            )
            row = await cursor.fetchone()
            return int(row[0]), float(row[1]), int(row[2])
