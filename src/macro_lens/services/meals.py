"""Meal persistence service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from macro_lens.domain.analysis import FoodItem, MealAnalysis
from macro_lens.domain.meals import MealRecord
from macro_lens.services.upstream import upstream_call

logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def create_meal(  # noqa: PLR0913
        self,
        user_id: str,
        user_email: str | None,
        image_url: str | None,
        analysis: MealAnalysis,
        created_at: datetime,
    ) -> UUID:
        """Create a meal row and return its id."""

    def create_foods(self, meal_id: UUID, foods: list[FoodItem]) -> None:
        """Create food rows for a meal."""

    def list_recent_meals(self, user_id: str, limit: int) -> list[MealRecord]:
        """Return a user's most recent meals with foods, newest first."""


@dataclass
class MealService:
    """Service that stores analyzed meals and reads meal history."""

    repository: MealRepository

    def save_meal(
        self,
        user_id: str,
        analysis: MealAnalysis,
        user_email: str | None = None,
        image_url: str | None = None,
    ) -> UUID:
        """Persist an analysis as a meal and return the new meal id.

        There is no idempotency key: resubmitting the same analysis creates a
        second meal.
        """
        with upstream_call("save meal"):
            meal_id = self.repository.create_meal(
                user_id=user_id,
                user_email=user_email,
                image_url=image_url,
                analysis=analysis,
                created_at=datetime.now(tz=UTC),
            )
            self.repository.create_foods(meal_id, list(analysis.foods))
        logger.info("Saved meal %s with %d foods", meal_id, len(analysis.foods))
        return meal_id

    def list_meals(self, user_id: str, limit: int = 10) -> list[MealRecord]:
        """Return the user's most recent meals."""
        with upstream_call("load meals"):
            return self.repository.list_recent_meals(user_id, limit)
