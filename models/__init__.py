from __future__ import annotations

from .db import db, client
from .workouts import WorkoutSession
from .nutrition import FoodEntry
from .goals import Goal

ALL_MODELS = [
    WorkoutSession,
    FoodEntry,
    Goal,
]
