"""
Plausibility check for claimed nutrition.

Two checks must both pass:
1. The ingredient-derived calorie estimate is within 30% of the claimed calories.
2. Macro calories (4/4/9 kcal per gram) are within 10% of the claimed calories.

The verdict is advisory: it drives a warning banner and never blocks a save.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from recipe_generator.calorie_estimator import estimate_calories
from recipe_generator.ingredient_parser import ParsedIngredient, extract_ingredients_with_quantities
from recipe_generator.nutrition import macro_calories, normalize_nutrition

logger = logging.getLogger(__name__)

ESTIMATE_TOLERANCE = 0.30
MACRO_TOLERANCE = 0.10
VALIDATION_WARNING = "The nutritional information may not accurately reflect the ingredient quantities."


def validate_nutritional_data(
    ingredients: Sequence[ParsedIngredient],
    calories: float,
    protein: float,
    carbs: float,
    fat: float,
) -> bool:
    """
    Check claimed calories and macros against the ingredients.

    Returns:
        True if the claim looks consistent; always False for calories <= 0
    """
    if calories <= 0:
        return False

    estimate_deviation = abs(estimate_calories(ingredients) - calories) / calories
    macro_deviation = abs(macro_calories(protein, carbs, fat) - calories) / calories

    return estimate_deviation <= ESTIMATE_TOLERANCE and macro_deviation <= MACRO_TOLERANCE


@dataclass
class NutritionAssessment:
    """Validator result with the numbers behind it, for display."""
    checked: bool
    plausible: bool = True
    estimated_calories: Optional[int] = None
    macro_calories: Optional[float] = None
    estimate_deviation: Optional[float] = None
    macro_deviation: Optional[float] = None
    warning: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "checked": self.checked,
            "plausible": self.plausible,
            "estimated_calories": self.estimated_calories,
            "macro_calories": self.macro_calories,
            "estimate_deviation": self.estimate_deviation,
            "macro_deviation": self.macro_deviation,
            "warning": self.warning,
        }


def assess_nutrition(ingredient_lines: List[str], nutrition_payload: Any) -> NutritionAssessment:
    """
    Run the plausibility check on raw ingredient lines and any nutrition payload.

    Nothing is checked when no line carries a quantity or calories are not positive.
    """
    nutrition = normalize_nutrition(nutrition_payload)
    parsed = extract_ingredients_with_quantities(ingredient_lines)

    if not parsed or nutrition.calories <= 0:
        logger.debug(f"Skipping nutrition check ({len(parsed)} parsed ingredients, {nutrition.calories} kcal)")
        return NutritionAssessment(checked=False)

    plausible = validate_nutritional_data(
        parsed, nutrition.calories, nutrition.protein, nutrition.carbs, nutrition.fat
    )
    estimate = estimate_calories(parsed)
    macros = macro_calories(nutrition.protein, nutrition.carbs, nutrition.fat)

    if not plausible:
        logger.info(f"Implausible nutrition: claimed {nutrition.calories} kcal, estimated {estimate}, macros {macros:.0f}")

    return NutritionAssessment(
        checked=True,
        plausible=plausible,
        estimated_calories=estimate,
        macro_calories=round(macros, 1),
        estimate_deviation=round(abs(estimate - nutrition.calories) / nutrition.calories, 3),
        macro_deviation=round(abs(macros - nutrition.calories) / nutrition.calories, 3),
        warning=None if plausible else VALIDATION_WARNING,
    )
