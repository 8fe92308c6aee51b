"""Step, goal and streak aggregation.

``StepsAggregator`` is the single source of truth for every surface that
shows steps: it owns the persisted preferences and streak, queries the
pedometer source and derives distance, calories and progress from it.

Construct one instance at startup and pass it to consumers. The aggregator
does no locking: preference and streak updates are read-modify-write and
assume one caller at a time (a single event loop). Add a lock around it
before sharing it between concurrent writers.
"""

import asyncio
import logging
import math
from collections.abc import AsyncIterator, Callable
from contextlib import aclosing
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..clients.base import AuthorizationStatus, PedometerData, PedometerSource
from ..config import DEFAULT_QUERY_TIMEOUT
from ..db.repositories import SettingsRepository
from ..events import ChangeEvent, EventChannel, Observer, Subscription
from ..exceptions import InvalidGoal, InvalidWeight
from ..models.activity import DailyRecord, TodayStats, calories_for_distance
from ..models.settings import (
    DEFAULT_DAILY_GOAL,
    DEFAULT_WEIGHT_KG,
    MIN_DAILY_GOAL,
    DistanceUnit,
    GoalChangeType,
    GoalConfig,
)
from ..models.streak import StreakState

logger = logging.getLogger(__name__)

# Settings store keys
GOAL_KEY = "dailyStepsGoal"
DISTANCE_UNIT_KEY = "distanceUnit"
WEIGHT_KEY = "userWeight"
STREAK_COUNT_KEY = "stepsStreakCount"
STREAK_DATE_KEY = "lastStreakDate"

WEEK_DAYS = 7
HOURLY_BUCKETS = 12
BUCKET_HOURS = 24 // HOURLY_BUCKETS


@dataclass(frozen=True)
class DailyOverview:
    """Everything the home screen shows for today."""

    stats: TodayStats
    yesterday_steps: int
    goal: int
    streak: int
    unit: DistanceUnit

    @property
    def step_delta(self) -> int:
        return self.stats.steps - self.yesterday_steps

    @property
    def goal_reached(self) -> bool:
        return self.stats.steps >= self.goal


def start_of_day(day: date) -> datetime:
    """Local midnight at the start of ``day``."""
    return datetime.combine(day, time.min)


class StepsAggregator:
    """Preferences, streak and step metrics over a pedometer source."""

    def __init__(
        self,
        settings: SettingsRepository,
        source: PedometerSource,
        clock: Callable[[], datetime] | None = None,
        query_timeout: float = DEFAULT_QUERY_TIMEOUT,
        events: EventChannel | None = None,
    ):
        """Create an aggregator.

        Args:
            settings: Durable key/value store for preferences and streak
            source: Pedometer data source
            clock: Returns local "now"; defaults to ``datetime.now``
            query_timeout: Seconds before a source query counts as unavailable
            events: Channel used for change notifications
        """
        self.settings = settings
        self.source = source
        self.clock = clock or datetime.now
        self.query_timeout = query_timeout
        self.events = events or EventChannel()
        self.goal_change_type: GoalChangeType | None = None

    # ---- Events ----

    def subscribe(self, event: ChangeEvent, observer: Observer) -> Subscription:
        """Register an observer for goal or distance unit changes."""
        return self.events.subscribe(event, observer)

    def pop_goal_change(self) -> GoalChangeType | None:
        """Return the direction of the last goal update once, then forget it."""
        change, self.goal_change_type = self.goal_change_type, None
        return change

    # ---- Preferences ----

    async def get_daily_goal(self) -> int:
        """Stored daily goal, or the default when unset."""
        raw = await self.settings.get(GOAL_KEY)
        goal = _parse_int(raw, GOAL_KEY)
        if not goal:
            return DEFAULT_DAILY_GOAL
        return goal

    async def set_daily_goal(self, goal: int) -> None:
        """Persist a new daily goal and notify observers.

        Raises:
            InvalidGoal: If ``goal`` is below the 1,000 step floor
        """
        if goal < MIN_DAILY_GOAL:
            raise InvalidGoal(goal, MIN_DAILY_GOAL)

        old_goal = await self.get_daily_goal()
        await self.settings.set(GOAL_KEY, str(int(goal)))

        if goal > old_goal:
            self.goal_change_type = GoalChangeType.INCREASED
        elif goal < old_goal:
            self.goal_change_type = GoalChangeType.DECREASED
        else:
            self.goal_change_type = None

        logger.info("Daily goal set to %d (was %d)", goal, old_goal)
        self.events.emit(ChangeEvent.GOAL_CHANGED)

    async def get_distance_unit(self) -> DistanceUnit:
        """Stored distance unit, kilometers when unset or unrecognised."""
        raw = await self.settings.get(DISTANCE_UNIT_KEY)
        if raw is None:
            return DistanceUnit.KM
        try:
            return DistanceUnit(raw)
        except ValueError:
            logger.warning("Ignoring unknown distance unit %r", raw)
            return DistanceUnit.KM

    async def set_distance_unit(self, unit: DistanceUnit | str) -> None:
        """Persist the distance unit and notify observers.

        Raises:
            ValueError: If ``unit`` is not a known unit
        """
        unit = DistanceUnit(unit)
        await self.settings.set(DISTANCE_UNIT_KEY, unit.value)
        logger.info("Distance unit set to %s", unit.value)
        self.events.emit(ChangeEvent.DISTANCE_UNIT_CHANGED)

    async def get_user_weight(self) -> float:
        """Stored body weight in kg, or the default when unset."""
        raw = await self.settings.get(WEIGHT_KEY)
        if raw is None:
            return DEFAULT_WEIGHT_KG
        try:
            weight = float(raw)
        except ValueError:
            logger.warning("Ignoring malformed %s value %r", WEIGHT_KEY, raw)
            return DEFAULT_WEIGHT_KG
        return weight if weight > 0 and math.isfinite(weight) else DEFAULT_WEIGHT_KG

    async def set_user_weight(self, weight_kg: float) -> None:
        """Persist the body weight used for calorie estimates.

        Raises:
            InvalidWeight: If ``weight_kg`` is not a positive finite number
        """
        if not (weight_kg > 0 and math.isfinite(weight_kg)):
            raise InvalidWeight(weight_kg)
        await self.settings.set(WEIGHT_KEY, repr(float(weight_kg)))
        logger.info("User weight set to %.1f kg", weight_kg)

    async def get_goal_config(self) -> GoalConfig:
        """Snapshot of goal, unit and weight."""
        goal, unit, weight = await asyncio.gather(
            self.get_daily_goal(),
            self.get_distance_unit(),
            self.get_user_weight(),
        )
        return GoalConfig(daily_step_goal=goal, distance_unit=unit, user_weight_kg=weight)

    # ---- Derived metrics ----

    async def calculate_calories(
        self, steps: int, distance_m: float, weight_kg: float | None = None
    ) -> float:
        """Calories for a walked distance at the stored body weight.

        Every calorie figure goes through here so all surfaces agree.
        ``weight_kg`` lets batch callers read the weight once.
        """
        if weight_kg is None:
            weight_kg = await self.get_user_weight()
        return calories_for_distance(distance_m, weight_kg)

    # ---- Source queries ----

    def today(self) -> date:
        return self.clock().date()

    async def authorization_status(self) -> AuthorizationStatus:
        """Source permission state; errors and timeouts read as unavailable."""
        try:
            return await asyncio.wait_for(
                self.source.authorization_status(), timeout=self.query_timeout
            )
        except asyncio.TimeoutError:
            logger.warning("%s authorization check timed out", self.source.source_name)
        except Exception:
            logger.warning(
                "%s authorization check failed", self.source.source_name, exc_info=True
            )
        return AuthorizationStatus.UNAVAILABLE

    async def _is_available(self) -> bool:
        status = await self.authorization_status()
        if status != AuthorizationStatus.AUTHORIZED:
            logger.debug("Source %s not usable: %s", self.source.source_name, status.value)
            return False
        return True

    async def _query(self, start: datetime, end: datetime) -> PedometerData | None:
        """Query the source; timeouts and errors count as no data."""
        try:
            return await asyncio.wait_for(
                self.source.query(start, end), timeout=self.query_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Query %s - %s timed out after %.1fs", start, end, self.query_timeout
            )
        except Exception:
            logger.warning("Query %s - %s failed", start, end, exc_info=True)
        return None

    async def fetch_today_stats(self) -> TodayStats:
        """Steps, distance and calories from local midnight to now.

        No permission, no hardware or no data all yield zeros.
        """
        now = self.clock()
        if not await self._is_available():
            return TodayStats()

        data = await self._query(start_of_day(now.date()), now)
        return await self._today_stats_from(data)

    async def _today_stats_from(self, data: PedometerData | None) -> TodayStats:
        if data is None:
            return TodayStats()
        distance = data.distance_m or 0.0
        calories = await self.calculate_calories(data.steps, distance)
        return TodayStats(steps=data.steps, distance_m=distance, calories=calories)

    async def fetch_yesterday_steps(self) -> int:
        """Steps recorded over the whole of yesterday, 0 if unavailable."""
        today = self.today()
        if not await self._is_available():
            return 0

        data = await self._query(
            start_of_day(today - timedelta(days=1)), start_of_day(today)
        )
        return data.steps if data else 0

    async def _fetch_day(self, day: date, weight_kg: float) -> DailyRecord:
        data = await self._query(start_of_day(day), start_of_day(day + timedelta(days=1)))
        if data is None:
            return DailyRecord(date=day)

        distance = data.distance_m or 0.0
        calories = await self.calculate_calories(data.steps, distance, weight_kg)
        return DailyRecord(date=day, steps=data.steps, distance_m=distance, calories=calories)

    async def fetch_weekly_steps(self) -> list[DailyRecord]:
        """One record per day for the last seven days, oldest first.

        The seven day windows are queried concurrently and only returned
        once all of them have finished. The last record is today.
        """
        today = self.today()
        days = [today - timedelta(days=offset) for offset in range(WEEK_DAYS - 1, -1, -1)]

        if not await self._is_available():
            return [DailyRecord(date=day) for day in days]

        weight = await self.get_user_weight()
        records = await asyncio.gather(*(self._fetch_day(day, weight) for day in days))
        return sorted(records, key=lambda record: record.date)

    async def fetch_hourly_steps(self) -> list[int]:
        """Steps per two-hour bucket since local midnight (12 buckets).

        Buckets starting after now are 0 and never queried. The current
        bucket ends at now. Sources that cannot answer sub-day windows get
        one query for the whole day, spread evenly over the elapsed buckets.
        """
        now = self.clock()
        midnight = start_of_day(now.date())
        buckets = [0] * HOURLY_BUCKETS

        if not await self._is_available():
            return buckets

        windows = []
        for index in range(HOURLY_BUCKETS):
            bucket_start = midnight + timedelta(hours=index * BUCKET_HOURS)
            if bucket_start > now:
                break
            bucket_end = min(bucket_start + timedelta(hours=BUCKET_HOURS), now)
            windows.append((index, bucket_start, bucket_end))

        if not self.source.supports_sub_day:
            return await self._spread_day_total(midnight, now, [w[0] for w in windows])

        results = await asyncio.gather(*(self._query(start, end) for _, start, end in windows))
        for (index, _, _), data in zip(windows, results):
            buckets[index] = data.steps if data else 0
        return buckets

    async def _spread_day_total(
        self, midnight: datetime, now: datetime, elapsed: list[int]
    ) -> list[int]:
        """Even split of the day's total across the elapsed buckets."""
        buckets = [0] * HOURLY_BUCKETS
        data = await self._query(midnight, now)
        if data is None or not elapsed:
            return buckets

        share, remainder = divmod(data.steps, len(elapsed))
        for position, index in enumerate(elapsed):
            buckets[index] = share + (1 if position < remainder else 0)
        return buckets

    async def fetch_overview(self) -> DailyOverview:
        """Today's stats, yesterday's steps, goal and updated streak."""
        stats, yesterday, goal, unit = await asyncio.gather(
            self.fetch_today_stats(),
            self.fetch_yesterday_steps(),
            self.get_daily_goal(),
            self.get_distance_unit(),
        )
        streak = await self.update_streak_if_needed(stats.steps)
        return DailyOverview(
            stats=stats,
            yesterday_steps=yesterday,
            goal=goal,
            streak=streak,
            unit=unit,
        )

    async def watch_today_stats(self) -> AsyncIterator[TodayStats]:
        """Yield today's stats each time they change.

        The source stream is reopened at every local midnight, so readings
        always cover [start of today, now). A failed or timed-out poll is
        logged and skipped. Yields a single zero reading when the source is
        not usable.
        """
        if not await self._is_available():
            yield TodayStats()
            return

        last: TodayStats | None = None
        while True:
            async with aclosing(self._stream_day(self.today())) as readings:
                async for data in readings:
                    stats = await self._today_stats_from(data)
                    if stats != last:
                        last = stats
                        yield stats

    async def _stream_day(self, day: date) -> AsyncIterator[PedometerData | None]:
        """Source readings for ``day`` until midnight passes or a poll fails."""
        updates = self.source.stream_updates(start_of_day(day))
        # Each step of the stream sleeps one poll interval, then queries
        timeout = self.source.poll_interval + self.query_timeout

        async with aclosing(updates):
            while True:
                try:
                    data = await asyncio.wait_for(anext(updates), timeout=timeout)
                except StopAsyncIteration:
                    break
                except asyncio.TimeoutError:
                    logger.warning(
                        "Live query for %s timed out after %.1fs", day, self.query_timeout
                    )
                    break
                except Exception:
                    logger.warning("Live query for %s failed", day, exc_info=True)
                    break

                if self.today() != day:
                    logger.debug("Day rolled over from %s, restarting stream", day)
                    return
                yield data

        await asyncio.sleep(self.source.poll_interval)

    # ---- Streak ----

    async def get_streak(self) -> StreakState:
        """Stored streak state."""
        values = await self.settings.get_many([STREAK_COUNT_KEY, STREAK_DATE_KEY])
        count = _parse_int(values.get(STREAK_COUNT_KEY), STREAK_COUNT_KEY) or 0

        last_date = None
        raw_date = values.get(STREAK_DATE_KEY)
        if raw_date:
            try:
                last_date = date.fromisoformat(raw_date[:10])
            except ValueError:
                logger.warning("Ignoring malformed %s value %r", STREAK_DATE_KEY, raw_date)

        return StreakState(count=max(count, 0), last_qualifying_date=last_date)

    async def update_streak_if_needed(self, today_steps: int) -> int:
        """Count today toward the streak if the goal is met.

        Below the goal, or already counted today, nothing is written and
        the stored count is returned. Otherwise the streak grows by one if
        yesterday qualified, or restarts at 1.

        Returns:
            Current streak count
        """
        goal = await self.get_daily_goal()
        state = await self.get_streak()

        if today_steps < goal:
            return state.count

        today = self.today()
        if state.counted_on(today):
            return state.count

        updated = state.register(today)
        await self.settings.set_many({
            STREAK_COUNT_KEY: str(updated.count),
            STREAK_DATE_KEY: today.isoformat(),
        })
        logger.info("Streak now %d day(s) as of %s", updated.count, today)
        return updated.count


def _parse_int(raw: str | None, key: str) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s value %r", key, raw)
        return None
