from __future__ import annotations

from datetime import date
from typing import Optional

from beanie.odm.fields import PydanticObjectId
from pydantic import Field
from pymongo import IndexModel, ASCENDING

from .base import BaseDoc
from .enums import FoodUnit, MealType


class FoodEntry(BaseDoc):
    user_id: PydanticObjectId
    food_id: Optional[PydanticObjectId] = None

    quantity: float = Field(default=1.0, gt=0)  # servings or grams, see unit
    unit: FoodUnit = FoodUnit.serving
    meal: MealType = MealType.breakfast
    date: date
    notes: Optional[str] = None

    # computed for this entry from the food and quantity
    total_calories: Optional[float] = Field(default=None, ge=0)
    total_protein: Optional[float] = Field(default=None, ge=0)
    total_carbs: Optional[float] = Field(default=None, ge=0)
    total_fat: Optional[float] = Field(default=None, ge=0)

    class Settings:
        name = "food_entries"
        indexes = [
            IndexModel([("user_id", ASCENDING), ("created_at", ASCENDING)]),
            IndexModel([("user_id", ASCENDING), ("date", ASCENDING)]),
            IndexModel([("meal", ASCENDING)]),
        ]
