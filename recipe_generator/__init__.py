"""
Recipe Generator - LLM-backed recipes from the ingredients you have.
"""

from recipe_generator.ingredient_parser import (
    ParsedIngredient,
    parse_ingredient,
    extract_ingredients_with_quantities,
)
from recipe_generator.calorie_estimator import estimate_calories
from recipe_generator.nutrition_validator import validate_nutritional_data, assess_nutrition
from recipe_generator.unit_conversion import convert_measurements_in_text
from recipe_generator.markdown_parser import parse_recipe_markdown
from recipe_generator.mock_generators import generate_mock_recipe, generate_mock_nutrition

__version__ = "0.1.0"

__all__ = [
    "ParsedIngredient",
    "parse_ingredient",
    "extract_ingredients_with_quantities",
    "estimate_calories",
    "validate_nutritional_data",
    "assess_nutrition",
    "convert_measurements_in_text",
    "parse_recipe_markdown",
    "generate_mock_recipe",
    "generate_mock_nutrition",
]
