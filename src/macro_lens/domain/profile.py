"""Body profile and nutrition target models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class Gender(StrEnum):
    """Sex used by the Mifflin-St Jeor equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Habitual activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "veryActive"


class Goal(StrEnum):
    """Body weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class BodyProfile(BaseModel):
    """Validated calculator input."""

    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)
    age: int = Field(gt=0)
    gender: Gender
    activity_level: ActivityLevel
    goal: Goal


@dataclass(frozen=True)
class MacroRange:
    """Inclusive min/max range."""

    min: int
    max: int


@dataclass(frozen=True)
class NutritionTargets:
    """Daily energy and macro ranges derived from a body profile."""

    bmr: int
    tdee: int
    calories: MacroRange
    protein: MacroRange
    carbs: MacroRange
    fats: MacroRange


@dataclass(frozen=True)
class ProfileTargets:
    """Single daily targets stored on a user profile."""

    target_calories: int
    target_protein: int
    target_carbs: int
    target_fats: int


class ProfileUpdate(BaseModel):
    """Partial profile update; every field is optional."""

    name: str | None = None
    weight_kg: float | None = Field(default=None, gt=0)
    height_cm: float | None = Field(default=None, gt=0)
    age: int | None = Field(default=None, gt=0)
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None
    goal: Goal | None = None


@dataclass(frozen=True)
class UserProfile:
    """Stored user profile."""

    user_id: str
    user_email: str | None
    name: str | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    age: int | None = None
    gender: str | None = None
    activity_level: str | None = None
    goal: str | None = None
    targets: ProfileTargets | None = None
    updated_at: datetime | None = None
