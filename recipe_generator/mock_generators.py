"""
Fallback generators used when the LLM call fails.

They fabricate a structurally complete recipe or nutrition payload so the
rest of the pipeline never sees a hole. Values are random but drawn from
fixed ranges:
- recipe adjective: uniform over ADJECTIVES
- cooking time: uniform integer minutes in [15, 44]
- vitamin/mineral percentages: uniform integer in [5, 35]
"""

import logging
import random
from typing import Dict, List, Optional, Sequence

from recipe_generator.data.models import MEAL_TYPES, EnhancedNutritionData, GeneratedRecipe, Macronutrients
from recipe_generator.nutrition import create_default_nutrition

logger = logging.getLogger(__name__)

MEAL_TYPE_NAMES = {meal_type: meal_type.title() for meal_type in MEAL_TYPES}

ADJECTIVES = [
    "Tasty", "Delicious", "Savory", "Hearty", "Homemade", "Classic",
    "Quick", "Easy", "Gourmet", "Healthy", "Fresh", "Flavorful",
]

EXTRA_INGREDIENTS = ["Salt and pepper to taste", "2 tablespoons cooking oil"]

VITAMIN_NAMES = ["A", "C", "D", "E", "K", "B1", "B2", "B3", "B6", "B12", "Folate"]
MINERAL_NAMES = [
    "Calcium", "Iron", "Magnesium", "Phosphorus", "Potassium",
    "Sodium", "Zinc", "Copper", "Manganese", "Selenium",
]

MIN_COOKING_MINUTES, MAX_COOKING_MINUTES = 15, 44
MIN_DAILY_PERCENT, MAX_DAILY_PERCENT = 5, 35


def generate_mock_recipe(
    ingredients: Sequence[str],
    preferences: str,
    meal_type: str,
    calories: int,
    rng: Optional[random.Random] = None,
) -> GeneratedRecipe:
    """
    Fabricate a recipe from the requested ingredients.

    Macros follow a 20/50/30 protein/carbs/fat split of ``calories``.
    ``preferences`` is accepted for signature parity with the LLM path but unused.
    """
    rng = rng or random.Random()
    ingredients = list(ingredients)

    main_ingredient = ingredients[0] if ingredients else "Delicious"
    secondary_ingredient = ingredients[1] if len(ingredients) > 1 else ""
    meal_name = MEAL_TYPE_NAMES.get(meal_type, meal_type.title())

    title = f"{rng.choice(ADJECTIVES)} {meal_name} {main_ingredient}"
    if secondary_ingredient:
        title += f" with {secondary_ingredient}"

    minutes = rng.randint(MIN_COOKING_MINUTES, MAX_COOKING_MINUTES)
    instructions = _mock_instructions(ingredients, main_ingredient)
    nutrition = create_default_nutrition(calories)
    all_ingredients = ingredients + EXTRA_INGREDIENTS

    markdown = "\n".join([
        f"# {title}",
        "",
        "## Ingredients",
        *(f"- {ingredient}" for ingredient in all_ingredients),
        "",
        "## Instructions",
        *(f"{i}. {step}" for i, step in enumerate(instructions, start=1)),
        "",
        "## Nutrition (Estimated)",
        f"- Calories: {calories} kcal",
        f"- Protein: {nutrition.protein}g",
        f"- Carbs: {nutrition.carbs}g",
        f"- Fat: {nutrition.fat}g",
        "",
        "## Cooking Time",
        f"{minutes} minutes",
        "",
    ])

    logger.info(f"Generated mock recipe: {title}")
    return GeneratedRecipe(
        title=title,
        ingredients=all_ingredients,
        instructions=instructions,
        calories=calories,
        cooking_time=f"{minutes} minutes",
        markdown=markdown,
        nutrition=nutrition,
    )


def _mock_instructions(ingredients: List[str], main_ingredient: str) -> List[str]:
    """Seven templated steps keyed off the first three ingredients."""
    return [
        f"Prepare all ingredients. Wash and chop {main_ingredient}.",
        "Heat a pan over medium heat with a tablespoon of oil.",
        f"Add {main_ingredient} and cook for 5 minutes." if len(ingredients) > 1
        else f"Cook {main_ingredient} until done.",
        f"Add {ingredients[1]} and continue cooking for 3 minutes." if len(ingredients) > 1
        else "Season to taste.",
        f"Stir in {ingredients[2]} and cook for another 2 minutes." if len(ingredients) > 2
        else "Adjust seasoning if needed.",
        "Season with salt and pepper to taste.",
        "Serve hot and enjoy your meal!",
    ]


def _random_percentages(names: List[str], rng: random.Random) -> Dict[str, int]:
    return {name: rng.randint(MIN_DAILY_PERCENT, MAX_DAILY_PERCENT) for name in names}


def generate_mock_nutrition(calories: int, rng: Optional[random.Random] = None) -> EnhancedNutritionData:
    """
    Fabricate a nested nutrition payload for ``calories``.

    Macros follow a 25/45/30 protein/carbs/fat split; vitamins and minerals
    are random daily-value percentages.
    """
    rng = rng or random.Random()

    fat = round(calories * 0.3 / 9)
    saturated_fat = round(fat * 0.3)

    macronutrients = Macronutrients(
        protein=round(calories * 0.25 / 4),
        carbs=round(calories * 0.45 / 4),
        fat=fat,
        fiber=round(calories / 100),
        sugar=round(calories * 0.1 / 4),
        saturated_fat=saturated_fat,
        unsaturated_fat=fat - saturated_fat,
        cholesterol=round(calories / 5),
        sodium=round(calories * 1.5),
    )

    logger.info(f"Generated mock nutrition for {calories} kcal")
    return EnhancedNutritionData(
        calories=calories,
        macronutrients=macronutrients,
        vitamins=_random_percentages(VITAMIN_NAMES, rng),
        minerals=_random_percentages(MINERAL_NAMES, rng),
        serving_size="1 serving",
        servings=1,
    )
