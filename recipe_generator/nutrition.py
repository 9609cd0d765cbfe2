"""
Nutrition payload normalization.

Nutrition arrives in two shapes:
- Flat:   {"calories", "protein", "carbs", "fat", ...}
- Nested: {"calories", "macronutrients": {"protein", "carbs", "fat", ...}, "vitamins", ...}

``parse_nutrition_payload`` tags a raw dict as one variant and
``normalize_nutrition`` always produces a flat NutritionData, which is the
only shape the validator consumes.
"""

import logging
from typing import Any, Optional, Union

from recipe_generator.data.models import (
    DEFAULT_CALORIES,
    EnhancedNutritionData,
    NutritionData,
)

logger = logging.getLogger(__name__)

NutritionPayload = Union[NutritionData, EnhancedNutritionData]

# Percent of calories per macro, and kcal per gram
PROTEIN_SHARE, CARBS_SHARE, FAT_SHARE = 0.2, 0.5, 0.3
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


def create_default_nutrition(calories: int) -> NutritionData:
    """Flat nutrition from a 20/50/30 protein/carbs/fat split of the calorie target."""
    return NutritionData(
        calories=calories,
        protein=round(calories * PROTEIN_SHARE / KCAL_PER_GRAM_PROTEIN),
        carbs=round(calories * CARBS_SHARE / KCAL_PER_GRAM_CARBS),
        fat=round(calories * FAT_SHARE / KCAL_PER_GRAM_FAT),
        fiber=round(calories * 0.05 / 2),
        sugar=round(calories * 0.1 / 4),
    )


def macro_calories(protein: float, carbs: float, fat: float) -> float:
    """Calories implied by macro grams (4/4/9)."""
    return (
        protein * KCAL_PER_GRAM_PROTEIN
        + carbs * KCAL_PER_GRAM_CARBS
        + fat * KCAL_PER_GRAM_FAT
    )


def parse_nutrition_payload(data: Any) -> Optional[NutritionPayload]:
    """
    Tag a raw payload as the flat or nested variant.

    Returns:
        NutritionData, EnhancedNutritionData, or None if neither shape matches
    """
    if isinstance(data, (NutritionData, EnhancedNutritionData)):
        return data
    if not isinstance(data, dict):
        return None

    if all(data.get(key) is not None for key in ("protein", "carbs", "fat")):
        return NutritionData.from_dict(data)
    if isinstance(data.get("macronutrients"), dict):
        return EnhancedNutritionData.from_dict(data)
    return None


def normalize_nutrition(data: Any) -> NutritionData:
    """Convert any nutrition payload to flat NutritionData, defaulting when unrecognised."""
    if not data:
        return create_default_nutrition(DEFAULT_CALORIES)

    payload = parse_nutrition_payload(data)
    if isinstance(payload, NutritionData):
        return payload
    if isinstance(payload, EnhancedNutritionData):
        return payload.to_flat()

    calories = data.get("calories") if isinstance(data, dict) else None
    try:
        calories = round(float(calories)) if calories is not None else None
    except (TypeError, ValueError):
        calories = None
    if calories:
        logger.debug("Unrecognised nutrition shape; deriving defaults from calories")
        return create_default_nutrition(calories)

    logger.debug("Unrecognised nutrition payload; using default nutrition")
    return create_default_nutrition(DEFAULT_CALORIES)
