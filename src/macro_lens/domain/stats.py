"""Domain models for meal statistics."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MealTotalsRow:
    """Totals of a stored meal used for aggregation."""

    created_at: datetime
    total_calories: int
    total_protein: int
    total_carbs: int
    total_fats: int
    meal_type: str = "meal"


@dataclass(frozen=True)
class WeeklyStats:
    """Totals over the trailing seven days."""

    total_meals: int
    total_calories: int
    avg_calories: int
    total_protein: int
    total_carbs: int
    total_fats: int
    daily_data: list[MealTotalsRow]


@dataclass(frozen=True)
class DailyPoint:
    """Aggregated macros for one calendar day."""

    date: str
    calories: int
    protein: int
    carbs: int
    fats: int
    meals: int


@dataclass(frozen=True)
class DistributionSlice:
    """Named share of a distribution chart."""

    name: str
    value: int
    color: str | None = None


@dataclass(frozen=True)
class AnalyticsStats:
    """Overall totals for the analytics window."""

    total_meals: int
    avg_calories: int
    total_protein: int
    total_carbs: int
    total_fats: int


@dataclass(frozen=True)
class AnalyticsReport:
    """Thirty-day analytics payload."""

    chart_data: list[DailyPoint]
    meal_distribution: list[DistributionSlice]
    macro_distribution: list[DistributionSlice]
    stats: AnalyticsStats
