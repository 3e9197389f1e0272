"""Domain models for persisted meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class FoodRecord:
    """Food row stored under a meal."""

    id: UUID
    meal_id: UUID
    name: str
    portion_size: str
    calories: int
    protein: int
    carbs: int
    fats: int
    confidence: str


@dataclass(frozen=True)
class MealRecord:
    """Meal row with its foods."""

    id: UUID
    user_id: str
    user_email: str | None
    image_url: str | None
    meal_type: str
    total_calories: int
    total_protein: int
    total_carbs: int
    total_fats: int
    health_tip: str
    created_at: datetime
    foods: list[FoodRecord]
