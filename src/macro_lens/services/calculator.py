"""Daily energy and macro targets from body metrics."""

import math

from macro_lens.domain.profile import (
    ActivityLevel,
    BodyProfile,
    Gender,
    Goal,
    MacroRange,
    NutritionTargets,
    ProfileTargets,
)

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

# kcal offsets from TDEE as (min, max)
CALORIE_RANGE_OFFSETS: dict[Goal, tuple[int, int]] = {
    Goal.LOSE: (-500, -250),
    Goal.MAINTAIN: (-100, 100),
    Goal.GAIN: (250, 500),
}

# single-value offsets used for stored profile targets
PROFILE_CALORIE_OFFSETS: dict[Goal, int] = {
    Goal.LOSE: -500,
    Goal.MAINTAIN: 0,
    Goal.GAIN: 300,
}

PROTEIN_G_PER_KG = (1.6, 2.2)
FAT_G_PER_KG = (0.8, 1.0)
CARB_SPREAD = 0.15
MIN_CARBS_G = 100

PROFILE_PROTEIN_G_PER_KG = 2.0
PROFILE_FAT_G_PER_KG = 0.9
MIN_PROFILE_PROTEIN_G = 50
MIN_PROFILE_FATS_G = 30

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


def calculate_bmr(
    weight_kg: float, height_cm: float, age: float, gender: Gender
) -> float:
    """Return basal metabolic rate using the Mifflin-St Jeor equation."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == Gender.MALE:
        return base + 5
    return base - 161


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Scale BMR by the activity multiplier."""
    return bmr * ACTIVITY_MULTIPLIERS[activity_level]


def calculate_targets(profile: BodyProfile) -> NutritionTargets:
    """Return BMR, TDEE and daily macro ranges for a body profile.

    BMR is reported in whole kcal and TDEE is derived from that whole value.
    The carb range is centered on the calories left after average protein and
    fat, and its lower bound never drops below ``MIN_CARBS_G``.
    """
    bmr = math.trunc(
        calculate_bmr(
            profile.weight_kg, profile.height_cm, profile.age, profile.gender
        )
    )
    tdee = calculate_tdee(bmr, profile.activity_level)

    low_offset, high_offset = CALORIE_RANGE_OFFSETS[profile.goal]
    calories = MacroRange(
        min=round_half_up(tdee + low_offset), max=round_half_up(tdee + high_offset)
    )
    protein = _per_kg_range(profile.weight_kg, PROTEIN_G_PER_KG)
    fats = _per_kg_range(profile.weight_kg, FAT_G_PER_KG)

    avg_calories = (calories.min + calories.max) / 2
    avg_protein = (protein.min + protein.max) / 2
    avg_fats = (fats.min + fats.max) / 2
    carb_calories = (
        avg_calories - avg_protein * KCAL_PER_G_PROTEIN - avg_fats * KCAL_PER_G_FAT
    )
    carbs_avg = round_half_up(carb_calories / KCAL_PER_G_CARBS)
    carbs = MacroRange(
        min=max(round_half_up(carbs_avg * (1 - CARB_SPREAD)), MIN_CARBS_G),
        max=round_half_up(carbs_avg * (1 + CARB_SPREAD)),
    )

    return NutritionTargets(
        bmr=bmr,
        tdee=round_half_up(tdee),
        calories=calories,
        protein=protein,
        carbs=carbs,
        fats=fats,
    )


def calculate_profile_targets(profile: BodyProfile) -> ProfileTargets:
    """Return the single daily targets stored on a user profile."""
    bmr = calculate_bmr(
        profile.weight_kg, profile.height_cm, profile.age, profile.gender
    )
    tdee = calculate_tdee(bmr, profile.activity_level)
    target_calories = round_half_up(tdee + PROFILE_CALORIE_OFFSETS[profile.goal])
    target_protein = round_half_up(profile.weight_kg * PROFILE_PROTEIN_G_PER_KG)
    target_fats = round_half_up(profile.weight_kg * PROFILE_FAT_G_PER_KG)
    carb_calories = (
        target_calories
        - target_protein * KCAL_PER_G_PROTEIN
        - target_fats * KCAL_PER_G_FAT
    )
    target_carbs = round_half_up(carb_calories / KCAL_PER_G_CARBS)
    return ProfileTargets(
        target_calories=target_calories,
        target_protein=max(target_protein, MIN_PROFILE_PROTEIN_G),
        target_carbs=max(target_carbs, MIN_CARBS_G),
        target_fats=max(target_fats, MIN_PROFILE_FATS_G),
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return math.floor(value + 0.5)


def _per_kg_range(weight_kg: float, per_kg: tuple[float, float]) -> MacroRange:
    low, high = per_kg
    return MacroRange(
        min=round_half_up(weight_kg * low), max=round_half_up(weight_kg * high)
    )
