"""
Unit tests for unit_conversion.py
"""

import re

import pytest

from recipe_generator.unit_conversion import (
    CONVERSION_FACTORS,
    IMPERIAL,
    METRIC,
    convert_ingredients,
    convert_measurements_in_text,
    convert_value,
    has_convertible_measurements,
    normalize_unit,
)


class TestToImperial:

    @pytest.mark.parametrize("text, expected", [
        ("100 g chicken", "3.5 oz chicken"),
        ("200g flour", "7.1 oz flour"),
        ("1 kg potatoes", "2.2 lb potatoes"),
        ("250 ml milk", "8.5 fl oz milk"),
        ("1 l water", "4.2 cups water"),
        ("Bake at 180°C", "Bake at 356.0 F"),
    ])
    def test_conversions(self, text, expected):
        assert convert_measurements_in_text(text, IMPERIAL) == expected

    def test_multiple_measurements(self):
        result = convert_measurements_in_text("Mix 200g flour with 250 ml milk", IMPERIAL)

        assert result == "Mix 7.1 oz flour with 8.5 fl oz milk"

    def test_unit_case_insensitive(self):
        assert convert_measurements_in_text("100G sugar", IMPERIAL) == "3.5 oz sugar"

    def test_words_starting_with_unit_letters_untouched(self):
        assert convert_measurements_in_text("2 large eggs", IMPERIAL) == "2 large eggs"


class TestToMetric:

    @pytest.mark.parametrize("text, expected", [
        ("4 oz cheese", "113.4 g cheese"),
        ("2 lbs beef", "0.9 kg beef"),
        ("8 fl oz milk", "236.6 ml milk"),
        ("2 cups rice", "0.5 l rice"),
        ("Bake at 350 F", "Bake at 176.7 C"),
    ])
    def test_conversions(self, text, expected):
        assert convert_measurements_in_text(text, METRIC) == expected

    def test_unconvertible_units_left_alone(self):
        assert convert_measurements_in_text("2 tbsp olive oil", METRIC) == "2 tbsp olive oil"

    def test_only_source_system_is_converted(self):
        """Converting to metric leaves metric measurements as written."""
        assert convert_measurements_in_text("100 g rice and 4 oz ham", METRIC) == "100 g rice and 113.4 g ham"


class TestRoundTrip:

    @pytest.mark.parametrize("text, back_factor", [
        ("100 g chicken", CONVERSION_FACTORS["oz_to_g"]),
        ("2 kg flour", CONVERSION_FACTORS["lb_to_kg"]),
        ("500 ml stock", CONVERSION_FACTORS["floz_to_ml"]),
        ("2 l water", CONVERSION_FACTORS["cup_to_l"]),
    ])
    def test_metric_imperial_metric(self, text, back_factor):
        """One-decimal rounding in the middle step is the only loss."""
        original = float(text.split()[0])

        there = convert_measurements_in_text(text, IMPERIAL)
        back = convert_measurements_in_text(there, METRIC)

        value = float(re.match(r"[\d.]+", back).group(0))
        assert abs(value - original) <= 0.05 * back_factor + 0.05

    def test_temperature(self):
        there = convert_measurements_in_text("Bake at 350 F", METRIC)
        back = convert_measurements_in_text(there, IMPERIAL)

        assert back == "Bake at 350.1 F"

    def test_temperature_celsius(self):
        there = convert_measurements_in_text("Bake at 180 C", IMPERIAL)
        back = convert_measurements_in_text(there, METRIC)

        assert there == "Bake at 356.0 F"
        assert back == "Bake at 180.0 C"


class TestHelpers:

    def test_invalid_system_raises(self):
        with pytest.raises(ValueError, match="Unknown unit system"):
            convert_measurements_in_text("100 g rice", "kelvin")

    @pytest.mark.parametrize("unit, key", [
        ("Fl. oz", "floz"),
        ("fl oz", "floz"),
        ("°C", "c"),
        ("cups", "cup"),
        ("LBS", "lb"),
    ])
    def test_normalize_unit(self, unit, key):
        assert normalize_unit(unit) == key

    def test_convert_value(self):
        assert convert_value(100, "g", "oz") == pytest.approx(3.527396)
        assert convert_value(100, "C", "F") == pytest.approx(212)

    def test_convert_value_unsupported_pair(self):
        assert convert_value(1, "cup", "ml") is None

    def test_convert_ingredients(self):
        result = convert_ingredients(["100 g chicken", "salt to taste"], IMPERIAL)

        assert result == ["3.5 oz chicken", "salt to taste"]

    def test_has_convertible_measurements(self):
        assert has_convertible_measurements("200g rice") is True
        assert has_convertible_measurements("2 cups milk") is True
        assert has_convertible_measurements("a pinch of salt") is False
