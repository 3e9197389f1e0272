"""Statistics and analytics over stored meals."""

from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo

from macro_lens.domain.stats import (
    AnalyticsReport,
    AnalyticsStats,
    DailyPoint,
    DistributionSlice,
    MealTotalsRow,
    WeeklyStats,
)
from macro_lens.services.calculator import (
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    round_half_up,
)
from macro_lens.services.upstream import upstream_call

WEEK_DAYS = 7
ANALYTICS_DAYS = 30
DAY_LABEL_FORMAT = "%b %d"

MACRO_COLORS = {
    "Protein": "#ef4444",
    "Carbs": "#f97316",
    "Fats": "#eab308",
}


class StatsRepository(Protocol):
    """Persistence interface for meal statistics."""

    def list_meal_totals(self, user_id: str, since: datetime) -> list[MealTotalsRow]:
        """Return meal totals created at or after ``since``, oldest first."""


@dataclass
class StatsService:
    """Service for weekly stats and thirty-day analytics."""

    repository: StatsRepository

    def get_weekly_stats(
        self, user_id: str, now: datetime | None = None
    ) -> WeeklyStats:
        """Return totals for meals logged in the trailing seven days."""
        since = (now or datetime.now(tz=UTC)) - timedelta(days=WEEK_DAYS)
        with upstream_call("load weekly stats"):
            rows = self.repository.list_meal_totals(user_id, since)
        total_calories = sum(row.total_calories for row in rows)
        return WeeklyStats(
            total_meals=len(rows),
            total_calories=total_calories,
            avg_calories=_average(total_calories, len(rows)),
            total_protein=sum(row.total_protein for row in rows),
            total_carbs=sum(row.total_carbs for row in rows),
            total_fats=sum(row.total_fats for row in rows),
            daily_data=rows,
        )

    def get_analytics(
        self,
        user_id: str,
        timezone_name: str = "UTC",
        now: datetime | None = None,
    ) -> AnalyticsReport:
        """Return per-day chart data and distributions for the last 30 days."""
        tz = ZoneInfo(timezone_name)
        since = (now or datetime.now(tz=UTC)) - timedelta(days=ANALYTICS_DAYS)
        with upstream_call("load analytics"):
            rows = self.repository.list_meal_totals(user_id, since)

        total_protein = sum(row.total_protein for row in rows)
        total_carbs = sum(row.total_carbs for row in rows)
        total_fats = sum(row.total_fats for row in rows)
        return AnalyticsReport(
            chart_data=_aggregate_days(rows, tz),
            meal_distribution=_meal_distribution(rows),
            macro_distribution=_macro_distribution(
                total_protein, total_carbs, total_fats
            ),
            stats=AnalyticsStats(
                total_meals=len(rows),
                avg_calories=_average(
                    sum(row.total_calories for row in rows), len(rows)
                ),
                total_protein=total_protein,
                total_carbs=total_carbs,
                total_fats=total_fats,
            ),
        )


def _average(total: int, count: int) -> int:
    if count == 0:
        return 0
    return round_half_up(total / count)


def _aggregate_days(rows: list[MealTotalsRow], tz: ZoneInfo) -> list[DailyPoint]:
    days: dict[str, DailyPoint] = {}
    for row in rows:
        label = row.created_at.astimezone(tz).strftime(DAY_LABEL_FORMAT)
        current = days.get(
            label,
            DailyPoint(date=label, calories=0, protein=0, carbs=0, fats=0, meals=0),
        )
        days[label] = DailyPoint(
            date=label,
            calories=current.calories + row.total_calories,
            protein=current.protein + row.total_protein,
            carbs=current.carbs + row.total_carbs,
            fats=current.fats + row.total_fats,
            meals=current.meals + 1,
        )
    return list(days.values())


def _meal_distribution(rows: list[MealTotalsRow]) -> list[DistributionSlice]:
    counts = Counter(row.meal_type for row in rows)
    return [
        DistributionSlice(name=meal_type[:1].upper() + meal_type[1:], value=count)
        for meal_type, count in counts.items()
    ]


def _macro_distribution(
    protein: int, carbs: int, fats: int
) -> list[DistributionSlice]:
    calories = {
        "Protein": protein * KCAL_PER_G_PROTEIN,
        "Carbs": carbs * KCAL_PER_G_CARBS,
        "Fats": fats * KCAL_PER_G_FAT,
    }
    total = sum(calories.values())
    if total <= 0:
        return []
    return [
        DistributionSlice(
            name=name,
            value=round_half_up(value / total * 100),
            color=MACRO_COLORS[name],
        )
        for name, value in calories.items()
    ]
