"""
Unit tests for mock_generators.py

Mock output is random; tests pin the structure and the allowed ranges.
"""

import random

import pytest

from recipe_generator.markdown_parser import parse_recipe_markdown
from recipe_generator.mock_generators import (
    ADJECTIVES,
    EXTRA_INGREDIENTS,
    MINERAL_NAMES,
    VITAMIN_NAMES,
    generate_mock_nutrition,
    generate_mock_recipe,
)


@pytest.fixture
def rng():
    return random.Random(42)


class TestGenerateMockRecipe:

    def test_title(self, rng):
        recipe = generate_mock_recipe(["chicken", "rice", "broccoli"], "", "dinner", 600, rng=rng)

        adjective, rest = recipe.title.split(" ", 1)
        assert adjective in ADJECTIVES
        assert rest == "Dinner chicken with rice"

    def test_single_ingredient_title(self, rng):
        recipe = generate_mock_recipe(["tofu"], "", "lunch", 400, rng=rng)

        assert recipe.title.endswith("Lunch tofu")

    def test_empty_ingredients(self, rng):
        recipe = generate_mock_recipe([], "", "snack", 200, rng=rng)

        assert recipe.title.endswith("Snack Delicious")
        assert recipe.ingredients == EXTRA_INGREDIENTS
        assert "Cook Delicious until done." in recipe.instructions

    def test_unknown_meal_type_is_title_cased(self, rng):
        recipe = generate_mock_recipe(["eggs", "toast", "jam"], "", "brunch", 450, rng=rng)

        assert "Brunch eggs with toast" in recipe.title

    def test_ingredients_include_extras(self, rng):
        recipe = generate_mock_recipe(["chicken", "rice", "broccoli"], "", "dinner", 600, rng=rng)

        assert recipe.ingredients == ["chicken", "rice", "broccoli"] + EXTRA_INGREDIENTS

    def test_instructions_use_first_three_ingredients(self, rng):
        recipe = generate_mock_recipe(["chicken", "rice", "broccoli"], "", "dinner", 600, rng=rng)

        assert len(recipe.instructions) == 7
        assert recipe.instructions[2] == "Add chicken and cook for 5 minutes."
        assert recipe.instructions[3] == "Add rice and continue cooking for 3 minutes."
        assert recipe.instructions[4] == "Stir in broccoli and cook for another 2 minutes."

    def test_cooking_time_range(self):
        for seed in range(50):
            recipe = generate_mock_recipe(["a", "b", "c"], "", "dinner", 500, rng=random.Random(seed))
            minutes = int(recipe.cooking_time.split()[0])
            assert 15 <= minutes <= 44

    @pytest.mark.parametrize("calories", [300, 500, 600, 1000])
    def test_macro_split(self, calories, rng):
        """Protein/carbs/fat follow a 20/50/30 split of the calorie target."""
        recipe = generate_mock_recipe(["a", "b", "c"], "", "dinner", calories, rng=rng)

        assert recipe.calories == calories
        assert abs(recipe.nutrition.protein - calories * 0.2 / 4) <= 1
        assert abs(recipe.nutrition.carbs - calories * 0.5 / 4) <= 1
        assert abs(recipe.nutrition.fat - calories * 0.3 / 9) <= 1

    def test_markdown_parses_back(self, rng):
        recipe = generate_mock_recipe(["chicken", "rice", "broccoli"], "", "dinner", 600, rng=rng)

        parsed = parse_recipe_markdown(recipe.markdown)

        assert parsed.title == recipe.title
        assert parsed.ingredients == recipe.ingredients
        assert parsed.instructions == recipe.instructions
        assert parsed.calories == 600
        assert parsed.cooking_time == recipe.cooking_time


class TestGenerateMockNutrition:

    def test_macros(self, rng):
        nutrition = generate_mock_nutrition(600, rng=rng)
        macros = nutrition.macronutrients

        assert nutrition.calories == 600
        assert abs(macros.protein - 600 * 0.25 / 4) <= 1
        assert abs(macros.carbs - 600 * 0.45 / 4) <= 1
        assert macros.fat == 20
        assert macros.saturated_fat + macros.unsaturated_fat == macros.fat
        assert macros.sodium == 900

    def test_vitamins_and_minerals(self):
        for seed in range(20):
            nutrition = generate_mock_nutrition(500, rng=random.Random(seed))

            assert list(nutrition.vitamins) == VITAMIN_NAMES
            assert list(nutrition.minerals) == MINERAL_NAMES
            assert all(5 <= v <= 35 for v in nutrition.vitamins.values())
            assert all(5 <= v <= 35 for v in nutrition.minerals.values())

    def test_serving(self, rng):
        nutrition = generate_mock_nutrition(500, rng=rng)

        assert nutrition.serving_size == "1 serving"
        assert nutrition.servings == 1

    def test_to_dict_is_nested(self, rng):
        data = generate_mock_nutrition(500, rng=rng).to_dict()

        assert set(data) == {"calories", "macronutrients", "vitamins", "minerals", "servingSize", "servings"}
        assert "saturatedFat" in data["macronutrients"]
