"""Supabase repository for meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from macro_lens.domain.analysis import FoodItem, MealAnalysis
from macro_lens.domain.meals import FoodRecord, MealRecord
from macro_lens.services.meals import MealRepository

_MEAL_COLUMNS = (
    "id, user_id, user_email, image_url, meal_type, total_calories, "
    "total_protein, total_carbs, total_fats, health_tip, created_at, "
    "meal_foods(id, meal_id, name, portion_size, calories, protein, carbs, "
    "fats, confidence)"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals and their foods."""

    client: Client

    def create_meal(  # noqa: PLR0913
        self,
        user_id: str,
        user_email: str | None,
        image_url: str | None,
        analysis: MealAnalysis,
        created_at: datetime,
    ) -> UUID:
        """Create a meal row and return its id."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": user_id,
                    "user_email": user_email,
                    "image_url": image_url,
                    "meal_type": analysis.meal_type,
                    "total_calories": analysis.total_calories,
                    "total_protein": analysis.total_protein,
                    "total_carbs": analysis.total_carbs,
                    "total_fats": analysis.total_fats,
                    "health_tip": analysis.health_tip,
                    "created_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return UUID(response.data[0]["id"])

    def create_foods(self, meal_id: UUID, foods: list[FoodItem]) -> None:
        """Create food rows for a meal."""
        payload = [
            {
                "meal_id": str(meal_id),
                "name": food.name,
                "portion_size": food.portion_size,
                "calories": food.calories,
                "protein": food.protein,
                "carbs": food.carbs,
                "fats": food.fats,
                "confidence": food.confidence,
            }
            for food in foods
        ]
        if payload:
            self.client.table("meal_foods").insert(payload).execute()

    def list_recent_meals(self, user_id: str, limit: int) -> list[MealRecord]:
        """Return recent meals with embedded foods, newest first."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]


def _parse_meal(row: dict[str, object]) -> MealRecord:
    return MealRecord(
        id=UUID(row["id"]),
        user_id=str(row["user_id"]),
        user_email=row.get("user_email"),
        image_url=row.get("image_url"),
        meal_type=str(row.get("meal_type") or "meal"),
        total_calories=int(row.get("total_calories") or 0),
        total_protein=int(row.get("total_protein") or 0),
        total_carbs=int(row.get("total_carbs") or 0),
        total_fats=int(row.get("total_fats") or 0),
        health_tip=str(row.get("health_tip") or ""),
        created_at=datetime.fromisoformat(row["created_at"]),
        foods=[_parse_food(food) for food in row.get("meal_foods") or []],
    )


def _parse_food(row: dict[str, object]) -> FoodRecord:
    return FoodRecord(
        id=UUID(row["id"]),
        meal_id=UUID(row["meal_id"]),
        name=str(row.get("name", "")),
        portion_size=str(row.get("portion_size", "")),
        calories=int(row.get("calories") or 0),
        protein=int(row.get("protein") or 0),
        carbs=int(row.get("carbs") or 0),
        fats=int(row.get("fats") or 0),
        confidence=str(row.get("confidence") or "Low"),
    )
