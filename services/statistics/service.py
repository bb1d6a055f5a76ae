from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Awaitable, Callable, List, Optional, Union

from models.enums import SummaryRange
from schemas.statistics import (
    DashboardOut,
    GoalProgressResult,
    MonthlyStatsOut,
    NoActiveGoalOut,
    WeeklyStatsOut,
    WorkoutSummaryOut,
)
from utils.logger import get_logger

from .aggregator import aggregate
from .errors import InvalidRangeError, StatisticsError
from .progress import evaluate_goal
from .report import build_dashboard, build_monthly_report, build_weekly_report, build_workout_summary
from .store import ActivityRecord, RecordStore
from .windows import DateInput, TimeWindow, resolve_month, resolve_range, resolve_trailing, resolve_week, utcnow

logger = get_logger(__name__)


async def gather_all(*aws: Awaitable) -> List[Any]:
    """
    Join semantics: all results or nothing. On the first failure the sibling
    tasks are cancelled and awaited before the original exception propagates.
    """
    tasks = [asyncio.ensure_future(a) for a in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class StatisticsService:
    """
    Weekly/monthly statistics, goal progress and the dashboard for one user.

    Holds no state besides its collaborators, so one instance per request or
    one per test is equally fine.
    """

    def __init__(self, store: RecordStore, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    async def _fetch_activity(self, user_id: Any, window: TimeWindow) -> List[ActivityRecord]:
        workouts, foods = await gather_all(
            self.store.find_workout_sessions(user_id, window.start, window.end),
            self.store.find_food_entries(user_id, window.start, window.end),
        )
        return [*workouts, *foods]

    async def get_weekly_stats(
        self,
        user_id: Any,
        start_date: Optional[DateInput] = None,
        end_date: Optional[DateInput] = None,
    ) -> WeeklyStatsOut:
        if end_date is not None:
            if start_date is None:
                raise InvalidRangeError("endDate requires startDate")
            window = resolve_range(start_date, end_date)
        else:
            window = resolve_week(start_date, now=self.clock())

        records = await self._fetch_activity(user_id, window)
        logger.debug("weekly stats user=%s window=%s records=%d", user_id, window.label, len(records))
        return build_weekly_report(aggregate(records, window))

    async def get_monthly_stats(
        self,
        user_id: Any,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> MonthlyStatsOut:
        window = resolve_month(month, year, now=self.clock())

        records = await self._fetch_activity(user_id, window)
        logger.debug("monthly stats user=%s window=%s records=%d", user_id, window.label, len(records))
        return build_monthly_report(aggregate(records, window))

    async def get_goal_progress(self, user_id: Any) -> GoalProgressResult:
        goal = await self.store.find_active_goal(user_id)
        if goal is None:
            return NoActiveGoalOut()

        week, month = await gather_all(self.get_weekly_stats(user_id), self.get_monthly_stats(user_id))
        return evaluate_goal(goal, week, month)

    async def get_dashboard(self, user_id: Any) -> DashboardOut:
        try:
            week, month, goal_progress = await gather_all(
                self.get_weekly_stats(user_id),
                self.get_monthly_stats(user_id),
                self.get_goal_progress(user_id),
            )
        except StatisticsError as exc:
            logger.warning("dashboard for user %s failed: %s", user_id, exc.message)
            raise

        logger.info("dashboard built for user %s", user_id)
        return build_dashboard(week, month, goal_progress)

    async def get_workout_summary(
        self,
        user_id: Any,
        time_range: Union[SummaryRange, str] = SummaryRange.month,
    ) -> WorkoutSummaryOut:
        window = resolve_trailing(time_range, now=self.clock())

        records = await self.store.find_workout_sessions(user_id, window.start, window.end, completed_only=True)
        return build_workout_summary(records, window)
