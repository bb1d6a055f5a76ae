from __future__ import annotations

from datetime import datetime
from typing import Optional

from beanie.odm.fields import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from models.enums import WeightGoalType


class GoalsModel(BaseModel):
    # dailyCalorieGoal, weeklyWorkoutGoal, ... on the wire; snake_case accepted too
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GoalCreateIn(GoalsModel):
    daily_calorie_goal: Optional[int] = Field(default=2000, ge=800, le=5000)
    weekly_calorie_goal: Optional[int] = Field(default=None, ge=5600, le=35000)
    daily_water_goal: Optional[float] = Field(default=2.0, ge=0.5, le=10.0)

    current_weight: Optional[float] = Field(default=None, ge=30.0, le=300.0)
    target_weight: Optional[float] = Field(default=None, ge=30.0, le=300.0)
    weight_goal_type: Optional[WeightGoalType] = WeightGoalType.maintain
    target_date: Optional[datetime] = None

    weekly_workout_goal: Optional[int] = Field(default=3, ge=1, le=7)
    daily_calorie_burn_goal: Optional[int] = Field(default=300, ge=100, le=2000)

    notes: Optional[str] = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def validate_weight_direction(self):
        if self.current_weight is None or self.target_weight is None:
            return self
        if self.weight_goal_type == WeightGoalType.lose and self.target_weight > self.current_weight:
            raise ValueError("targetWeight must not exceed currentWeight when weightGoalType=lose")
        if self.weight_goal_type == WeightGoalType.gain and self.target_weight < self.current_weight:
            raise ValueError("targetWeight must not be below currentWeight when weightGoalType=gain")
        return self


class GoalUpdateIn(GoalsModel):
    """Partial update. Only the fields sent are applied; the merged goal is re-checked."""

    daily_calorie_goal: Optional[int] = Field(default=None, ge=800, le=5000)
    weekly_calorie_goal: Optional[int] = Field(default=None, ge=5600, le=35000)
    daily_water_goal: Optional[float] = Field(default=None, ge=0.5, le=10.0)

    current_weight: Optional[float] = Field(default=None, ge=30.0, le=300.0)
    target_weight: Optional[float] = Field(default=None, ge=30.0, le=300.0)
    weight_goal_type: Optional[WeightGoalType] = None
    target_date: Optional[datetime] = None

    weekly_workout_goal: Optional[int] = Field(default=None, ge=1, le=7)
    daily_calorie_burn_goal: Optional[int] = Field(default=None, ge=100, le=2000)

    notes: Optional[str] = Field(default=None, max_length=2000)
    is_active: Optional[bool] = None


class GoalOut(GoalsModel):
    id: PydanticObjectId
    user_id: PydanticObjectId
    daily_calorie_goal: Optional[int] = None
    weekly_calorie_goal: Optional[int] = None
    daily_water_goal: Optional[float] = None
    current_weight: Optional[float] = None
    target_weight: Optional[float] = None
    weight_goal_type: Optional[WeightGoalType] = None
    target_date: Optional[datetime] = None
    weekly_workout_goal: Optional[int] = None
    daily_calorie_burn_goal: Optional[int] = None
    is_active: bool
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
