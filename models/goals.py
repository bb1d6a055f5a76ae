from __future__ import annotations

from datetime import datetime
from typing import Optional

from beanie.odm.fields import PydanticObjectId
from pydantic import Field
from pymongo import IndexModel, ASCENDING, DESCENDING

from .base import BaseDoc
from .enums import WeightGoalType


class Goal(BaseDoc):
    user_id: PydanticObjectId

    daily_calorie_goal: Optional[int] = Field(default=2000, ge=800, le=5000)
    weekly_calorie_goal: Optional[int] = Field(default=None, ge=5600, le=35000)
    daily_water_goal: Optional[float] = Field(default=2.0, ge=0.5, le=10.0)  # litres

    current_weight: Optional[float] = Field(default=None, ge=30.0, le=300.0)
    target_weight: Optional[float] = Field(default=None, ge=30.0, le=300.0)
    weight_goal_type: Optional[WeightGoalType] = WeightGoalType.maintain
    target_date: Optional[datetime] = None

    weekly_workout_goal: Optional[int] = Field(default=3, ge=1, le=7)
    daily_calorie_burn_goal: Optional[int] = Field(default=300, ge=100, le=2000)

    # single active goal per user, see services.goals.GoalManager
    is_active: bool = True
    notes: Optional[str] = None

    class Settings:
        name = "goals"
        indexes = [
            IndexModel([("user_id", ASCENDING), ("is_active", ASCENDING), ("created_at", DESCENDING)]),
        ]
