"""Supabase repository for meal statistics."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from macro_lens.domain.stats import MealTotalsRow
from macro_lens.services.stats import StatsRepository


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Supabase implementation for stats queries."""

    client: Client

    def list_meal_totals(self, user_id: str, since: datetime) -> list[MealTotalsRow]:
        """Return meal totals since a point in time, oldest first."""
        response = (
            self.client.table("meals")
            .select(
                "created_at, meal_type, total_calories, total_protein, "
                "total_carbs, total_fats"
            )
            .eq("user_id", user_id)
            .gte("created_at", since.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> MealTotalsRow:
    return MealTotalsRow(
        created_at=datetime.fromisoformat(row["created_at"]),
        total_calories=int(row.get("total_calories") or 0),
        total_protein=int(row.get("total_protein") or 0),
        total_carbs=int(row.get("total_carbs") or 0),
        total_fats=int(row.get("total_fats") or 0),
        meal_type=str(row.get("meal_type") or "meal"),
    )
