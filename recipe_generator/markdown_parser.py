"""
Extract structured fields from recipe markdown produced by the LLM.

Expected template:

    # Title
    ## Ingredients
    - 100g chicken breast
    ## Instructions
    1. Step
    ## Nutrition (Estimated)
    - Calories: 450 kcal
    - Protein: 35g
    ## Cooking Time
    25 minutes

The model's output is not guaranteed to follow the template, so every field
is matched independently and a miss falls back to a default instead of raising.
"""

import logging
import re
from typing import List, Optional

from recipe_generator.data.models import GeneratedRecipe, NutritionData

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Generated Recipe"

TITLE_PATTERN = re.compile(r"^#[ \t]+(.+)$", re.MULTILINE)
INGREDIENTS_PATTERN = re.compile(r"## Ingredients\s+([\s\S]*?)(?=##|\Z)")
INSTRUCTIONS_PATTERN = re.compile(r"## Instructions\s+([\s\S]*?)(?=##|\Z)")
CALORIES_PATTERN = re.compile(r"Calories:\s*(\d+)\s*kcal")
COOKING_TIME_PATTERN = re.compile(r"## Cooking Time\s+(\d+)\s*minutes")
STEP_NUMBER_PATTERN = re.compile(r"^\d+\.\s*")
# Anchored to the start of a bullet so "Saturated Fat:" is not read as fat
MACRO_PATTERNS = {
    "protein": re.compile(r"^[\s\-*]*Protein:\s*(\d+(?:\.\d+)?)\s*g", re.IGNORECASE | re.MULTILINE),
    "carbs": re.compile(r"^[\s\-*]*Carb(?:ohydrate)?s:\s*(\d+(?:\.\d+)?)\s*g", re.IGNORECASE | re.MULTILINE),
    "fat": re.compile(r"^[\s\-*]*Fat:\s*(\d+(?:\.\d+)?)\s*g", re.IGNORECASE | re.MULTILINE),
}


def parse_recipe_markdown(markdown: str) -> GeneratedRecipe:
    """
    Parse recipe markdown into a GeneratedRecipe.

    Args:
        markdown: Raw markdown text from the model

    Returns:
        GeneratedRecipe; missing sections give empty lists / None, a missing
        title gives "Generated Recipe"
    """
    markdown = markdown or ""

    recipe = GeneratedRecipe(
        title=_extract_title(markdown),
        ingredients=_extract_ingredients(markdown),
        instructions=_extract_instructions(markdown),
        calories=_extract_calories(markdown),
        cooking_time=_extract_cooking_time(markdown),
        markdown=markdown,
    )
    recipe.nutrition = _extract_nutrition(markdown, recipe.calories)

    logger.debug(
        f"Parsed recipe '{recipe.title}': {len(recipe.ingredients)} ingredients, "
        f"{len(recipe.instructions)} steps, calories={recipe.calories}"
    )
    return recipe


def _extract_title(markdown: str) -> str:
    match = TITLE_PATTERN.search(markdown)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return DEFAULT_TITLE


def _extract_ingredients(markdown: str) -> List[str]:
    match = INGREDIENTS_PATTERN.search(markdown)
    if not match:
        return []
    return [
        line.replace("-", "", 1).strip()
        for line in match.group(1).split("\n")
        if line.strip().startswith("-")
    ]


def _extract_instructions(markdown: str) -> List[str]:
    match = INSTRUCTIONS_PATTERN.search(markdown)
    if not match:
        return []
    return [
        STEP_NUMBER_PATTERN.sub("", line.strip()).strip()
        for line in match.group(1).split("\n")
        if STEP_NUMBER_PATTERN.match(line.strip())
    ]


def _extract_calories(markdown: str) -> Optional[int]:
    match = CALORIES_PATTERN.search(markdown)
    return int(match.group(1)) if match else None


def _extract_cooking_time(markdown: str) -> Optional[str]:
    match = COOKING_TIME_PATTERN.search(markdown)
    return f"{match.group(1)} minutes" if match else None


def _extract_nutrition(markdown: str, calories: Optional[int]) -> Optional[NutritionData]:
    """Macros from the nutrition section, only when calories and all three macros are present."""
    if calories is None:
        return None

    macros = {}
    for name, pattern in MACRO_PATTERNS.items():
        match = pattern.search(markdown)
        if not match:
            return None
        macros[name] = float(match.group(1))

    return NutritionData(calories=calories, **macros)
