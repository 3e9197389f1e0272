"""Models for normalized meal analysis results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Confidence = Literal["High", "Medium", "Low"]
CONFIDENCE_LEVELS: tuple[str, ...] = ("High", "Medium", "Low")


class FoodItem(BaseModel):
    """Single food detected in a meal photo."""

    model_config = ConfigDict(frozen=True)

    name: str
    portion_size: str
    calories: int = Field(ge=0)
    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fats: int = Field(ge=0)
    confidence: Confidence


class MealAnalysis(BaseModel):
    """Fully populated result of one image analysis."""

    model_config = ConfigDict(frozen=True)

    foods: list[FoodItem] = Field(min_length=1)
    total_calories: int = Field(ge=0)
    total_protein: int = Field(ge=0)
    total_carbs: int = Field(ge=0)
    total_fats: int = Field(ge=0)
    meal_type: str
    health_tip: str
