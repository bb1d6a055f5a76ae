from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Protocol, Sequence

from beanie.odm.fields import PydanticObjectId
from pymongo.errors import PyMongoError

from models import FoodEntry, Goal, WorkoutSession
from models.enums import WorkoutCategory, WorkoutStatus
from utils.logger import get_logger

from .errors import StoreUnavailableError
from .windows import to_naive_utc

logger = get_logger(__name__)


class RecordKind(str, Enum):
    workout = "workout"
    nutrition = "nutrition"


@dataclass(frozen=True)
class ActivityRecord:
    user_id: Any
    occurred_at: datetime
    kind: RecordKind
    duration_minutes: Optional[float] = None
    calories_burned: Optional[float] = None
    calories_consumed: Optional[float] = None
    category: Optional[WorkoutCategory] = None

    @classmethod
    def from_workout(cls, doc: WorkoutSession, at: str = "created_at") -> "ActivityRecord":
        return cls(
            user_id=doc.user_id,
            occurred_at=to_naive_utc(getattr(doc, at)),
            kind=RecordKind.workout,
            duration_minutes=doc.duration,
            calories_burned=doc.calories_burned,
            category=doc.category,
        )

    @classmethod
    def from_food_entry(cls, doc: FoodEntry) -> "ActivityRecord":
        return cls(
            user_id=doc.user_id,
            occurred_at=to_naive_utc(doc.created_at),
            kind=RecordKind.nutrition,
            calories_consumed=doc.total_calories,
        )


@dataclass(frozen=True)
class ActiveGoal:
    """Read-only view of the goal the progress figures are measured against."""

    id: Optional[str]
    user_id: Any
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

    @classmethod
    def from_document(cls, doc: Goal) -> "ActiveGoal":
        return cls(
            id=str(doc.id) if doc.id is not None else None,
            user_id=doc.user_id,
            created_at=to_naive_utc(doc.created_at),
            daily_calorie_goal=doc.daily_calorie_goal,
            weekly_calorie_goal=doc.weekly_calorie_goal,
            daily_water_goal=doc.daily_water_goal,
            weekly_workout_goal=doc.weekly_workout_goal,
            daily_calorie_burn_goal=doc.daily_calorie_burn_goal,
            current_weight=doc.current_weight,
            target_weight=doc.target_weight,
            weight_goal_type=doc.weight_goal_type.value if doc.weight_goal_type else None,
            target_date=doc.target_date,
            notes=doc.notes,
        )


class RecordStore(Protocol):
    """
    Read side the statistics core depends on. Bounds are inclusive.

    With `completed_only` workouts are selected and timed by when they were
    completed, otherwise by when they were logged.
    """

    async def find_workout_sessions(
        self,
        user_id: Any,
        start: datetime,
        end: datetime,
        *,
        completed_only: bool = False,
    ) -> Sequence[ActivityRecord]:
        ...

    async def find_food_entries(self, user_id: Any, start: datetime, end: datetime) -> Sequence[ActivityRecord]:
        ...

    async def find_active_goal(self, user_id: Any) -> Optional[ActiveGoal]:
        ...


class BeanieRecordStore:
    async def find_workout_sessions(
        self,
        user_id: PydanticObjectId,
        start: datetime,
        end: datetime,
        *,
        completed_only: bool = False,
    ) -> List[ActivityRecord]:
        at = "end_time" if completed_only else "created_at"
        query = {"user_id": user_id, at: {"$gte": start, "$lte": end}}
        if completed_only:
            query["status"] = WorkoutStatus.completed.value
        try:
            docs = await WorkoutSession.find(query).sort(f"+{at}").to_list()
        except PyMongoError as exc:
            logger.warning("workout_sessions query failed for user %s: %s", user_id, exc)
            raise StoreUnavailableError("Workout sessions are unavailable") from exc
        return [ActivityRecord.from_workout(d, at) for d in docs]

    async def find_food_entries(self, user_id: PydanticObjectId, start: datetime, end: datetime) -> List[ActivityRecord]:
        query = {"user_id": user_id, "created_at": {"$gte": start, "$lte": end}}
        try:
            docs = await FoodEntry.find(query).sort("+created_at").to_list()
        except PyMongoError as exc:
            logger.warning("food_entries query failed for user %s: %s", user_id, exc)
            raise StoreUnavailableError("Food entries are unavailable") from exc
        return [ActivityRecord.from_food_entry(d) for d in docs]

    async def find_active_goal(self, user_id: PydanticObjectId) -> Optional[ActiveGoal]:
        try:
            goals = (
                await Goal.find(Goal.user_id == user_id, Goal.is_active == True)  # noqa: E712
                .sort("-created_at")
                .limit(1)
                .to_list()
            )
        except PyMongoError as exc:
            logger.warning("goals query failed for user %s: %s", user_id, exc)
            raise StoreUnavailableError("Goals are unavailable") from exc
        return ActiveGoal.from_document(goals[0]) if goals else None
