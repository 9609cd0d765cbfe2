"""
Unit tests for nutrition_validator.py

The validator needs both the ingredient estimate (within 30%) and the macro
calories (within 10%) to agree with the claimed calories.
"""

from recipe_generator.ingredient_parser import extract_ingredients_with_quantities
from recipe_generator.nutrition_validator import (
    VALIDATION_WARNING,
    assess_nutrition,
    validate_nutritional_data,
)


def parsed(*lines):
    return extract_ingredients_with_quantities(list(lines))


class TestValidateNutritionalData:

    def test_consistent_claim(self):
        # Estimate: 200 * 1.65 + 100 * 1.3 = 460; macros: 200 + 160 + 99 = 459
        ingredients = parsed("200g chicken breast", "100g rice")

        assert validate_nutritional_data(ingredients, 460, 50, 40, 11) is True

    def test_macros_far_below_calories(self):
        """500 kcal claimed but 10/10/10 macros only add up to 170 kcal."""
        ingredients = parsed("300g chicken breast")

        assert validate_nutritional_data(ingredients, 500, 10, 10, 10) is False

    def test_estimate_outside_tolerance(self):
        # Estimate 165 vs claimed 300 (45% off); macros are exact
        ingredients = parsed("100g chicken breast")

        assert validate_nutritional_data(ingredients, 300, 30, 36, 4) is False

    def test_estimate_inside_tolerance(self):
        # Estimate 165 vs claimed 200 (17.5% off); macros 200.5
        ingredients = parsed("100g chicken breast")

        assert validate_nutritional_data(ingredients, 200, 20, 20, 4.5) is True

    def test_zero_calories_is_never_valid(self):
        assert validate_nutritional_data(parsed("100g chicken"), 0, 0, 0, 0) is False

    def test_negative_calories_is_never_valid(self):
        assert validate_nutritional_data(parsed("100g chicken"), -100, 10, 10, 10) is False


class TestAssessNutrition:

    def test_flat_payload(self):
        result = assess_nutrition(
            ["200g chicken breast", "100g rice", "Salt to taste"],
            {"calories": 460, "protein": 50, "carbs": 40, "fat": 11},
        )

        assert result.checked is True
        assert result.plausible is True
        assert result.estimated_calories == 460
        assert result.macro_calories == 459
        assert result.warning is None

    def test_nested_payload(self):
        result = assess_nutrition(
            ["300g chicken breast"],
            {"calories": 500, "macronutrients": {"protein": 10, "carbs": 10, "fat": 10}},
        )

        assert result.checked is True
        assert result.plausible is False
        assert result.warning == VALIDATION_WARNING

    def test_no_quantities_skips_check(self):
        result = assess_nutrition(["salt", "pepper"], {"calories": 500, "protein": 10, "carbs": 10, "fat": 10})

        assert result.checked is False
        assert result.plausible is True
        assert result.warning is None

    def test_missing_payload_uses_defaults(self):
        result = assess_nutrition(["300g chicken breast"], None)

        assert result.checked is True
        assert result.estimated_calories == 495

    def test_to_dict(self):
        data = assess_nutrition(["100g chicken"], {"calories": 500, "protein": 10, "carbs": 10, "fat": 10}).to_dict()

        assert data["checked"] is True
        assert data["plausible"] is False
        assert data["macro_calories"] == 170
        assert set(data) >= {"estimate_deviation", "macro_deviation", "warning"}

    def test_oversized_quantity_is_not_an_error(self):
        result = assess_nutrition(
            ["1" + "0" * 400 + "g chicken"],
            {"calories": 500, "protein": 25, "carbs": 62, "fat": 17},
        )

        assert result.checked is False

    def test_overflowing_estimate_is_implausible(self):
        result = assess_nutrition(
            ["1" + "0" * 307 + " kg chicken"],
            {"calories": 500, "protein": 25, "carbs": 62, "fat": 17},
        )

        assert result.checked is True
        assert result.plausible is False
