"""
Unit tests for calorie_estimator.py
"""

import sys

import pytest

from recipe_generator.calorie_estimator import (
    MINIMUM_ESTIMATE,
    estimate_calories,
    match_calorie_keyword,
    quantity_in_grams,
)
from recipe_generator.ingredient_parser import ParsedIngredient, parse_ingredient, extract_ingredients_with_quantities


def parsed(*lines):
    return extract_ingredients_with_quantities(list(lines))


class TestMatchCalorieKeyword:

    def test_substring_match(self):
        assert match_calorie_keyword("boneless chicken thighs") == "chicken"

    def test_case_insensitive(self):
        assert match_calorie_keyword("Cheddar CHEESE") == "cheese"

    def test_first_declared_keyword_wins(self):
        """'olive oil' contains both 'oil' and 'olive'; 'oil' is declared first."""
        assert match_calorie_keyword("olive oil") == "oil"
        assert match_calorie_keyword("chicken broth") == "chicken"

    def test_no_match(self):
        assert match_calorie_keyword("saffron") is None


class TestQuantityInGrams:

    @pytest.mark.parametrize("line, grams", [
        ("100g rice", 100),
        ("1 kg rice", 1000),
        ("1 cup rice", 240),
        ("2 tbsp oil", 30),
        ("3 tsp sugar", 15),
    ])
    def test_unit_conversion(self, line, grams):
        assert quantity_in_grams(parse_ingredient(line)) == pytest.approx(grams)

    def test_unknown_unit_taken_as_grams(self):
        assert quantity_in_grams(parse_ingredient("2 pinches salt")) == 2


class TestEstimateCalories:

    def test_chicken_breast(self):
        """100g chicken at 1.65 kcal/g."""
        assert estimate_calories(parsed("100g chicken breast")) == 165

    def test_sums_ingredients(self):
        # 200 * 1.65 + 240 * 1.3
        assert estimate_calories(parsed("200g chicken", "1 cup rice")) == 642

    def test_pound_of_beef(self):
        assert estimate_calories(parsed("1 lb beef")) == 1134

    def test_unmatched_ingredients_contribute_nothing(self):
        assert estimate_calories(parsed("100g chicken breast", "50g saffron")) == 165

    def test_minimum_estimate(self):
        assert estimate_calories(parsed("10g spinach")) == MINIMUM_ESTIMATE

    def test_empty_list(self):
        assert estimate_calories([]) == MINIMUM_ESTIMATE

    def test_overflowing_total_is_capped(self):
        # 1e307 kg of chicken overflows to inf once converted to grams
        huge = "1" + "0" * 307 + " kg chicken"

        assert estimate_calories(parsed(huge, huge)) == int(sys.float_info.max)

    def test_non_finite_quantity_is_capped(self):
        ingredient = ParsedIngredient(name="beef", quantity=float("inf"), unit="g", original_text="lots of beef")

        assert estimate_calories([ingredient]) == int(sys.float_info.max)
