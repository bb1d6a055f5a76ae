from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Number = Union[int, float]


class StatsOut(BaseModel):
    # reports go out as camelCase JSON: totalWorkouts, dailyData, ...
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---------- buckets ----------

class WorkoutTotalsOut(StatsOut):
    total_duration: Number = 0
    total_calories_burned: Number = 0
    session_count: int = 0


class NutritionTotalsOut(StatsOut):
    total_calories: Number = 0
    entry_count: int = 0


class DailyStatsOut(StatsOut):
    date: str
    day_name: str
    workout: WorkoutTotalsOut
    nutrition: NutritionTotalsOut


class WeekBreakdownOut(StatsOut):
    week_start: str
    week_end: str
    workout: WorkoutTotalsOut
    nutrition: NutritionTotalsOut


# ---------- reports ----------

class WeeklyStatsOut(StatsOut):
    start_date: str
    end_date: str
    total_workouts: int
    total_workout_duration: Number
    total_calories_burned: Number
    total_calories_consumed: Number
    daily_data: List[DailyStatsOut]


class MonthlyStatsOut(StatsOut):
    month: int
    year: int
    month_name: str
    start_date: str
    end_date: str
    total_workouts: int
    total_workout_duration: Number
    total_calories_burned: Number
    total_calories_consumed: Number
    weekly_data: List[WeekBreakdownOut]


class WorkoutSummaryOut(StatsOut):
    time_range: str
    start_date: str
    end_date: str
    total_workouts: int
    total_duration: Number
    total_calories: Number
    average_duration: int
    workouts_by_category: Dict[str, int]


# ---------- goal progress ----------

class ProgressMetricOut(StatsOut):
    target: Number
    achieved: Number
    percentage: int


class ActiveGoalOut(StatsOut):
    id: Optional[str] = None
    created_at: datetime
    daily_calorie_goal: Optional[int] = None
    weekly_calorie_goal: Optional[int] = None
    daily_water_goal: Optional[float] = None
    weekly_workout_goal: Optional[int] = None
    daily_calorie_burn_goal: Optional[int] = None
    current_weight: Optional[float] = None
    target_weight: Optional[float] = None
    weight_goal_type: Optional[str] = None
    target_date: Optional[datetime] = None
    notes: Optional[str] = None


class WeeklyProgressOut(StatsOut):
    workouts: ProgressMetricOut
    calories_burned: ProgressMetricOut


class MonthlyProgressOut(StatsOut):
    workouts: ProgressMetricOut


class WeeklyGoalProgressOut(StatsOut):
    current: WeeklyStatsOut
    progress: WeeklyProgressOut


class MonthlyGoalProgressOut(StatsOut):
    current: MonthlyStatsOut
    progress: MonthlyProgressOut


class GoalProgressOut(StatsOut):
    has_active_goal: Literal[True] = True
    goal: ActiveGoalOut
    weekly: WeeklyGoalProgressOut
    monthly: MonthlyGoalProgressOut


class NoActiveGoalOut(StatsOut):
    has_active_goal: Literal[False] = False


GoalProgressResult = Union[GoalProgressOut, NoActiveGoalOut]


# ---------- dashboard ----------

class DashboardSummaryOut(StatsOut):
    weekly_workouts: int
    weekly_calories_burned: Number
    weekly_calories_consumed: Number
    monthly_workouts: int
    monthly_calories_burned: Number
    monthly_calories_consumed: Number


class DashboardOut(StatsOut):
    this_week: WeeklyStatsOut
    this_month: MonthlyStatsOut
    goal_progress: GoalProgressResult
    summary: DashboardSummaryOut
