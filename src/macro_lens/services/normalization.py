"""Normalization of decoded model replies into ``MealAnalysis``.

Only a missing or empty food list rejects a reply. Every other anomaly is
repaired with a value from ``DEFAULTS``.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from macro_lens.domain.analysis import CONFIDENCE_LEVELS, FoodItem, MealAnalysis
from macro_lens.domain.errors import NoFoodDetected

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

FOOD_NUMERIC_FIELDS = ("calories", "protein", "carbs", "fats")
TOTAL_NUMERIC_FIELDS = (
    "total_calories",
    "total_protein",
    "total_carbs",
    "total_fats",
)


@dataclass(frozen=True)
class NormalizationDefaults:
    """Values substituted for absent or unusable reply fields."""

    food_name: str = "Unknown food"
    portion_size: str = "N/A"
    confidence: str = "Low"
    meal_type: str = "meal"
    health_tip: str = "Enjoy your meal!"
    number: int = 0


DEFAULTS = NormalizationDefaults()


@dataclass(frozen=True)
class Coerced(Generic[T]):
    """A normalized field value and whether the default was applied."""

    value: T
    defaulted: bool


def coerce_int(value: object, default: int = DEFAULTS.number) -> Coerced[int]:
    """Coerce a reply value to a non-negative integer.

    Numbers are truncated toward zero and strings contribute their leading
    integer (``"250 kcal"`` gives 250). Booleans, non-finite floats, other
    types and negative results fall back to ``default``.
    """
    parsed: int | None = None
    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        parsed = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            try:
                parsed = int(match.group(1))
            except ValueError:
                # digit string longer than the interpreter conversion limit
                parsed = None
    if parsed is None or parsed < 0:
        return Coerced(default, defaulted=True)
    return Coerced(parsed, defaulted=False)


def coerce_text(value: object, default: str) -> Coerced[str]:
    """Return ``value`` when it is a non-blank string, else ``default``."""
    if isinstance(value, str) and value.strip():
        return Coerced(value, defaulted=False)
    return Coerced(default, defaulted=True)


def coerce_confidence(value: object) -> Coerced[str]:
    """Map a confidence label onto High/Medium/Low."""
    if isinstance(value, str):
        label = value.strip().capitalize()
        if label in CONFIDENCE_LEVELS:
            return Coerced(label, defaulted=False)
    return Coerced(DEFAULTS.confidence, defaulted=True)


def normalize_analysis(tree: dict[str, object]) -> MealAnalysis:
    """Validate and default a decoded reply.

    Raises ``NoFoodDetected`` when ``foods`` is absent, not a list, or empty.
    Totals are taken from the reply as-is and are not reconciled with the
    per-food numbers.
    """
    foods = tree.get("foods")
    if not isinstance(foods, list) or not foods:
        raise NoFoodDetected("Reply has no foods list")

    tracker = _DefaultTracker()
    items = [
        _normalize_food(raw, f"foods[{index}]", tracker)
        for index, raw in enumerate(foods)
    ]
    totals = {
        field_name: tracker.take(field_name, coerce_int(tree.get(field_name)))
        for field_name in TOTAL_NUMERIC_FIELDS
    }
    meal_type = tracker.take(
        "meal_type", coerce_text(tree.get("meal_type"), DEFAULTS.meal_type)
    )
    health_tip = tracker.take(
        "health_tip", coerce_text(tree.get("health_tip"), DEFAULTS.health_tip)
    )
    if tracker.fields:
        logger.info("Applied defaults to reply fields: %s", ", ".join(tracker.fields))

    return MealAnalysis(
        foods=items,
        meal_type=meal_type,
        health_tip=health_tip,
        **totals,
    )


def _normalize_food(raw: object, path: str, tracker: "_DefaultTracker") -> FoodItem:
    food = raw if isinstance(raw, dict) else {}
    numbers = {
        field_name: tracker.take(
            f"{path}.{field_name}", coerce_int(food.get(field_name))
        )
        for field_name in FOOD_NUMERIC_FIELDS
    }
    return FoodItem(
        name=tracker.take(
            f"{path}.name", coerce_text(food.get("name"), DEFAULTS.food_name)
        ),
        portion_size=tracker.take(
            f"{path}.portion_size",
            coerce_text(food.get("portion_size"), DEFAULTS.portion_size),
        ),
        confidence=tracker.take(
            f"{path}.confidence", coerce_confidence(food.get("confidence"))
        ),
        **numbers,
    )


@dataclass
class _DefaultTracker:
    fields: list[str] = field(default_factory=list)

    def take(self, field_path: str, coerced: Coerced[T]) -> T:
        if coerced.defaulted:
            self.fields.append(field_path)
        return coerced.value
