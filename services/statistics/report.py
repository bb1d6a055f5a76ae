from __future__ import annotations

from typing import Dict, Iterable

from models.enums import WorkoutCategory
from schemas.statistics import (
    DailyStatsOut,
    DashboardOut,
    DashboardSummaryOut,
    GoalProgressResult,
    MonthlyStatsOut,
    NutritionTotalsOut,
    WeekBreakdownOut,
    WeeklyStatsOut,
    WorkoutSummaryOut,
    WorkoutTotalsOut,
)

from .aggregator import Aggregate, Totals, reduce_records
from .progress import round_half_up
from .store import ActivityRecord, RecordKind
from .windows import MONTH_NAMES, TimeWindow


def _workout_out(t: Totals) -> WorkoutTotalsOut:
    return WorkoutTotalsOut(
        total_duration=t.total_duration,
        total_calories_burned=t.total_calories_burned,
        session_count=t.session_count,
    )


def _nutrition_out(t: Totals) -> NutritionTotalsOut:
    return NutritionTotalsOut(total_calories=t.total_calories_consumed, entry_count=t.entry_count)


def build_weekly_report(agg: Aggregate) -> WeeklyStatsOut:
    """One entry per day of the week; explicit ranges have no sub-windows and so no daily data."""
    daily = [
        DailyStatsOut(
            date=b.window.start_date.isoformat(),
            day_name=b.window.weekday.label if b.window.weekday is not None else "",
            workout=_workout_out(b.totals),
            nutrition=_nutrition_out(b.totals),
        )
        for b in agg.buckets
    ]
    return WeeklyStatsOut(
        start_date=agg.window.start_date.isoformat(),
        end_date=agg.window.end_date.isoformat(),
        total_workouts=agg.totals.session_count,
        total_workout_duration=agg.totals.total_duration,
        total_calories_burned=agg.totals.total_calories_burned,
        total_calories_consumed=agg.totals.total_calories_consumed,
        daily_data=daily,
    )


def build_monthly_report(agg: Aggregate) -> MonthlyStatsOut:
    first = agg.window.start_date
    weeks = [
        WeekBreakdownOut(
            week_start=b.window.start_date.isoformat(),
            week_end=b.window.end_date.isoformat(),
            workout=_workout_out(b.totals),
            nutrition=_nutrition_out(b.totals),
        )
        for b in agg.buckets
    ]
    return MonthlyStatsOut(
        month=first.month,
        year=first.year,
        month_name=MONTH_NAMES[first.month - 1],
        start_date=first.isoformat(),
        end_date=agg.window.end_date.isoformat(),
        total_workouts=agg.totals.session_count,
        total_workout_duration=agg.totals.total_duration,
        total_calories_burned=agg.totals.total_calories_burned,
        total_calories_consumed=agg.totals.total_calories_consumed,
        weekly_data=weeks,
    )


def build_workout_summary(records: Iterable[ActivityRecord], window: TimeWindow) -> WorkoutSummaryOut:
    """`window` is a trailing window from resolve_trailing; its label is the range name."""
    sessions = [r for r in records if r.kind == RecordKind.workout and window.contains(r.occurred_at)]
    totals = reduce_records(sessions)

    by_category: Dict[str, int] = {c.value: 0 for c in WorkoutCategory}
    for s in sessions:
        category = WorkoutCategory(s.category) if s.category is not None else WorkoutCategory.other
        by_category[category.value] += 1

    average = round_half_up(totals.total_duration / totals.session_count) if totals.session_count else 0

    return WorkoutSummaryOut(
        time_range=window.label,
        start_date=window.start_date.isoformat(),
        end_date=window.end_date.isoformat(),
        total_workouts=totals.session_count,
        total_duration=totals.total_duration,
        total_calories=totals.total_calories_burned,
        average_duration=average,
        workouts_by_category=by_category,
    )


def build_dashboard(week: WeeklyStatsOut, month: MonthlyStatsOut, goal_progress: GoalProgressResult) -> DashboardOut:
    return DashboardOut(
        this_week=week,
        this_month=month,
        goal_progress=goal_progress,
        summary=DashboardSummaryOut(
            weekly_workouts=week.total_workouts,
            weekly_calories_burned=week.total_calories_burned,
            weekly_calories_consumed=week.total_calories_consumed,
            monthly_workouts=month.total_workouts,
            monthly_calories_burned=month.total_calories_burned,
            monthly_calories_consumed=month.total_calories_consumed,
        ),
    )
