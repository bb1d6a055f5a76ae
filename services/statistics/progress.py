from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from schemas.statistics import (
    ActiveGoalOut,
    GoalProgressOut,
    MonthlyGoalProgressOut,
    MonthlyProgressOut,
    MonthlyStatsOut,
    ProgressMetricOut,
    WeeklyGoalProgressOut,
    WeeklyProgressOut,
    WeeklyStatsOut,
)

from .store import ActiveGoal

DAYS_PER_WEEK = 7
WEEKS_PER_MONTH = 4


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percentage(achieved: float, target: float) -> int:
    """achieved/target as a whole percent, half rounded up. A target of 0 means no goal: 0."""
    if not target or target <= 0:
        return 0
    return round_half_up(achieved / target * 100)


@dataclass(frozen=True)
class ProgressMetric:
    target: float
    achieved: float

    @property
    def percentage(self) -> int:
        return percentage(self.achieved, self.target)

    def to_out(self) -> ProgressMetricOut:
        return ProgressMetricOut(target=self.target, achieved=self.achieved, percentage=self.percentage)


def _target(value: Optional[float], factor: int = 1) -> float:
    return (value or 0) * factor


def evaluate_goal(goal: ActiveGoal, week: WeeklyStatsOut, month: MonthlyStatsOut) -> GoalProgressOut:
    """Compare this week's and this month's totals against `goal`. Pure; the goal is not touched."""
    weekly_workouts = ProgressMetric(target=_target(goal.weekly_workout_goal), achieved=week.total_workouts)
    weekly_burned = ProgressMetric(
        target=_target(goal.daily_calorie_burn_goal, DAYS_PER_WEEK),
        achieved=week.total_calories_burned,
    )
    monthly_workouts = ProgressMetric(
        target=_target(goal.weekly_workout_goal, WEEKS_PER_MONTH),
        achieved=month.total_workouts,
    )

    return GoalProgressOut(
        goal=ActiveGoalOut(
            id=goal.id,
            created_at=goal.created_at,
            daily_calorie_goal=goal.daily_calorie_goal,
            weekly_calorie_goal=goal.weekly_calorie_goal,
            daily_water_goal=goal.daily_water_goal,
            weekly_workout_goal=goal.weekly_workout_goal,
            daily_calorie_burn_goal=goal.daily_calorie_burn_goal,
            current_weight=goal.current_weight,
            target_weight=goal.target_weight,
            weight_goal_type=goal.weight_goal_type,
            target_date=goal.target_date,
            notes=goal.notes,
        ),
        weekly=WeeklyGoalProgressOut(
            current=week,
            progress=WeeklyProgressOut(workouts=weekly_workouts.to_out(), calories_burned=weekly_burned.to_out()),
        ),
        monthly=MonthlyGoalProgressOut(
            current=month,
            progress=MonthlyProgressOut(workouts=monthly_workouts.to_out()),
        ),
    )
