import os

os.environ.setdefault("JWT_SECRET", "test-secret")

import asyncio
from datetime import datetime
from typing import Iterable, Optional

import pytest
from beanie.odm.fields import PydanticObjectId

from models.enums import WorkoutCategory
from services.statistics import (
    ActiveGoal,
    ActivityRecord,
    RecordKind,
    StatisticsService,
    StoreUnavailableError,
)

# Wednesday. Its week is 2024-05-13..2024-05-19; May 2024 itself starts on a Wednesday.
NOW = datetime(2024, 5, 15, 12, 0)
USER_ID = PydanticObjectId("65f000000000000000000001")
OTHER_USER_ID = PydanticObjectId("65f000000000000000000002")


def run(coroutine):
    return asyncio.run(coroutine)


def workout(
    occurred_at: datetime,
    duration: Optional[float] = None,
    burned: Optional[float] = None,
    category: Optional[WorkoutCategory] = None,
    user_id=USER_ID,
) -> ActivityRecord:
    return ActivityRecord(
        user_id=user_id,
        occurred_at=occurred_at,
        kind=RecordKind.workout,
        duration_minutes=duration,
        calories_burned=burned,
        category=category,
    )


def meal(occurred_at: datetime, calories: Optional[float] = None, user_id=USER_ID) -> ActivityRecord:
    return ActivityRecord(
        user_id=user_id,
        occurred_at=occurred_at,
        kind=RecordKind.nutrition,
        calories_consumed=calories,
    )


def goal(created_at: datetime = datetime(2024, 5, 1), user_id=USER_ID, **fields) -> ActiveGoal:
    return ActiveGoal(id="goal-1", user_id=user_id, created_at=created_at, **fields)


class InMemoryRecordStore:
    """RecordStore double. `pending` workouts are returned unless completed_only is set."""

    def __init__(
        self,
        records: Iterable[ActivityRecord] = (),
        goals: Iterable[ActiveGoal] = (),
        pending: Iterable[ActivityRecord] = (),
        fail_on: Iterable[str] = (),
    ):
        self.records = list(records)
        self.goals = list(goals)
        self.pending = list(pending)
        self.fail_on = set(fail_on)
        self.calls = []

    def _select(self, records, user_id, kind, start, end):
        found = [
            r for r in records
            if r.user_id == user_id and r.kind == kind and start <= r.occurred_at <= end
        ]
        return sorted(found, key=lambda r: r.occurred_at)

    async def find_workout_sessions(self, user_id, start, end, *, completed_only=False):
        self.calls.append(("workouts", start, end, completed_only))
        if "workouts" in self.fail_on:
            raise StoreUnavailableError("Workout sessions are unavailable")
        pool = self.records if completed_only else self.records + self.pending
        return self._select(pool, user_id, RecordKind.workout, start, end)

    async def find_food_entries(self, user_id, start, end):
        self.calls.append(("food", start, end))
        if "food" in self.fail_on:
            raise StoreUnavailableError("Food entries are unavailable")
        return self._select(self.records, user_id, RecordKind.nutrition, start, end)

    async def find_active_goal(self, user_id):
        self.calls.append(("goal", user_id))
        if "goal" in self.fail_on:
            raise StoreUnavailableError("Goals are unavailable")
        mine = [g for g in self.goals if g.user_id == user_id]
        return max(mine, key=lambda g: g.created_at) if mine else None


def make_service(store: InMemoryRecordStore) -> StatisticsService:
    return StatisticsService(store, clock=lambda: NOW)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def service(store) -> StatisticsService:
    return make_service(store)
