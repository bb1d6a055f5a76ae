from __future__ import annotations
from enum import Enum


class WorkoutCategory(str, Enum):
    strength = "strength"
    cardio = "cardio"
    flexibility = "flexibility"
    other = "other"


class WorkoutStatus(str, Enum):
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class FoodUnit(str, Enum):
    serving = "serving"
    gram = "gram"
    cup = "cup"
    piece = "piece"
    ml = "ml"


class WeightGoalType(str, Enum):
    lose = "lose"
    gain = "gain"
    maintain = "maintain"


class SummaryRange(str, Enum):
    week = "week"
    month = "month"
    year = "year"
