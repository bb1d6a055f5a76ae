from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from beanie.odm.fields import PydanticObjectId
from pydantic import Field, model_validator
from pymongo import IndexModel, ASCENDING, DESCENDING

from .base import BaseDoc, utcnow
from .enums import WorkoutCategory, WorkoutStatus


def _as_utc(value: datetime) -> datetime:
    # naive values are UTC, as Mongo hands them back
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


class WorkoutSession(BaseDoc):
    user_id: PydanticObjectId
    workout_id: Optional[PydanticObjectId] = None  # template reference, None for custom sessions

    name: str = Field(min_length=1, max_length=100)
    category: WorkoutCategory = WorkoutCategory.other
    status: WorkoutStatus = WorkoutStatus.in_progress

    start_time: datetime = Field(default_factory=utcnow)
    end_time: Optional[datetime] = None

    duration: Optional[int] = Field(default=None, ge=0)  # minutes
    calories_burned: Optional[int] = Field(default=None, ge=0)

    exercises: List[Dict[str, Any]] = Field(default_factory=list)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_times(self):
        if self.end_time is not None and _as_utc(self.end_time) < _as_utc(self.start_time):
            raise ValueError("end_time must not be before start_time")
        return self

    class Settings:
        name = "workout_sessions"
        indexes = [
            IndexModel([("user_id", ASCENDING), ("created_at", ASCENDING)]),
            IndexModel([("user_id", ASCENDING), ("status", ASCENDING), ("created_at", DESCENDING)]),
        ]
