"""
Rough calorie estimation from parsed ingredients.

This is a plausibility oracle for the nutrition validator, not a nutrition
database: a handful of keywords map to kcal per gram and common units map to
grams with flat approximations.
"""

import logging
import math
import sys
from typing import Dict, Iterable, Optional

from recipe_generator.ingredient_parser import ParsedIngredient

logger = logging.getLogger(__name__)

MINIMUM_ESTIMATE = 100

# kcal per gram. Order matters: the first keyword contained in the
# ingredient name wins ("chicken broth" -> chicken).
CALORIES_PER_GRAM: Dict[str, float] = {
    # Proteins
    "chicken": 1.65,
    "beef": 2.5,
    "fish": 1.3,
    "tofu": 0.76,
    "eggs": 1.55,

    # Carbs
    "rice": 1.3,
    "pasta": 1.31,
    "bread": 2.65,
    "flour": 3.64,
    "potato": 0.77,

    # Fats
    "oil": 8.84,
    "butter": 7.17,
    "olive": 8.84,

    # Vegetables
    "carrot": 0.41,
    "broccoli": 0.34,
    "spinach": 0.23,
    "tomato": 0.18,

    # Fruits
    "apple": 0.52,
    "banana": 0.89,
    "orange": 0.47,

    # Dairy
    "milk": 0.42,
    "cheese": 4.02,
    "yogurt": 0.59,

    # Nuts and seeds
    "almonds": 5.76,
    "walnuts": 6.54,
    "chia": 4.86,
}

# Grams per unit; a cup is 240g regardless of what is in it.
# Units not listed (including "g" and "") are taken as grams.
GRAMS_PER_UNIT: Dict[str, float] = {
    "kg": 1000,
    "oz": 28.35,
    "lb": 453.59,
    "cup": 240,
    "tbsp": 15,
    "tsp": 5,
}


def match_calorie_keyword(name: str) -> Optional[str]:
    """Return the first table keyword contained in the ingredient name."""
    name_lower = name.lower()
    for keyword in CALORIES_PER_GRAM:
        if keyword in name_lower:
            return keyword
    return None


def quantity_in_grams(ingredient: ParsedIngredient) -> float:
    """Convert the parsed quantity to grams."""
    return ingredient.quantity * GRAMS_PER_UNIT.get(ingredient.unit, 1)


def estimate_calories(ingredients: Iterable[ParsedIngredient]) -> int:
    """
    Estimate total calories for a list of parsed ingredients.

    Ingredients matching no keyword contribute nothing. A total that
    overflows a float is capped at the largest float.

    Returns:
        Rounded kcal, never below 100
    """
    total = 0.0

    for ingredient in ingredients:
        keyword = match_calorie_keyword(ingredient.name)
        if keyword is None:
            continue
        total += quantity_in_grams(ingredient) * CALORIES_PER_GRAM[keyword]

    if not math.isfinite(total):
        logger.warning(f"Calorie total is not finite ({total}); capping")
        total = sys.float_info.max if total > 0 else 0.0

    estimate = max(MINIMUM_ESTIMATE, round(total))
    logger.debug(f"Estimated {estimate} kcal (raw total {total:.1f})")
    return estimate
