"""
Metric/imperial conversion of measurements embedded in free text.

    convert_measurements_in_text("100 g chicken", "imperial") -> "3.5 oz chicken"
    convert_measurements_in_text("Bake at 350 F", "metric")   -> "Bake at 176.7 C"

Converted values always carry one decimal place. Units without a conversion
are left exactly as written. The labels written by one direction ("fl oz",
"cups", "F") are recognised by the other, so text can be toggled back and forth.
"""

import re
from typing import Callable, Dict, List, Optional, Tuple, Union

METRIC = "metric"
IMPERIAL = "imperial"
UNIT_SYSTEMS = (METRIC, IMPERIAL)

Factor = Union[float, Callable[[float], float]]

CONVERSION_FACTORS: Dict[str, Factor] = {
    # Weight
    "g_to_oz": 0.03527396,
    "oz_to_g": 28.3495,
    "kg_to_lb": 2.20462,
    "lb_to_kg": 0.453592,

    # Volume
    "ml_to_floz": 0.033814,
    "floz_to_ml": 29.5735,
    "l_to_cup": 4.22675,
    "cup_to_l": 0.236588,

    # Temperature
    "c_to_f": lambda c: c * 9 / 5 + 32,
    "f_to_c": lambda f: (f - 32) * 5 / 9,
}

# Each pattern captures (number, unit); longer alternatives come first.
UNIT_PATTERNS = {
    METRIC: re.compile(r"(\d+(?:\.\d+)?)\s*(kg|g|ml|l|°c|c)\b", re.IGNORECASE),
    IMPERIAL: re.compile(r"(\d+(?:\.\d+)?)\s*(fl\.?\s?oz|floz|oz|lbs?|cups?|°f|f)\b", re.IGNORECASE),
}

# Source unit (normalised) -> (target label, conversion key)
UNIT_CONVERSIONS: Dict[str, Tuple[str, str]] = {
    # To metric
    "oz": ("g", "oz_to_g"),
    "lb": ("kg", "lb_to_kg"),
    "floz": ("ml", "floz_to_ml"),
    "cup": ("l", "cup_to_l"),
    "f": ("C", "f_to_c"),

    # To imperial
    "g": ("oz", "g_to_oz"),
    "kg": ("lb", "kg_to_lb"),
    "ml": ("fl oz", "ml_to_floz"),
    "l": ("cups", "l_to_cup"),
    "c": ("F", "c_to_f"),
}

_PLURALS = {"cups": "cup", "lbs": "lb"}


def normalize_unit(unit: str) -> str:
    """Canonical key for a unit token: "Fl. oz" -> "floz", "°C" -> "c", "cups" -> "cup"."""
    key = re.sub(r"[\s.°]", "", unit.lower())
    return _PLURALS.get(key, key)


def _apply(factor: Factor, value: float) -> float:
    if callable(factor):
        return factor(value)
    return value * factor


def convert_value(value: float, from_unit: str, to_unit: str) -> Optional[float]:
    """
    Convert a single value between two units.

    Returns:
        Converted value, or None if the pair is not supported
    """
    factor = CONVERSION_FACTORS.get(f"{normalize_unit(from_unit)}_to_{normalize_unit(to_unit)}")
    if factor is None:
        return None
    return _apply(factor, value)


def convert_measurements_in_text(text: str, to_system: str) -> str:
    """
    Rewrite every measurement in ``text`` into ``to_system``.

    Raises:
        ValueError: If to_system is not "metric" or "imperial"
    """
    if to_system not in UNIT_SYSTEMS:
        raise ValueError(f"Unknown unit system: {to_system!r} (expected one of {UNIT_SYSTEMS})")

    source_system = IMPERIAL if to_system == METRIC else METRIC

    def replace(match: re.Match) -> str:
        value, unit = match.groups()
        conversion = UNIT_CONVERSIONS.get(normalize_unit(unit))
        if conversion is None:
            return match.group(0)

        target_unit, conversion_key = conversion
        converted = _apply(CONVERSION_FACTORS[conversion_key], float(value))
        return f"{converted:.1f} {target_unit}"

    return UNIT_PATTERNS[source_system].sub(replace, text)


def convert_ingredients(ingredients: List[str], to_system: str) -> List[str]:
    """Convert every ingredient line to ``to_system``."""
    return [convert_measurements_in_text(ingredient, to_system) for ingredient in ingredients]


def has_convertible_measurements(text: str) -> bool:
    """True if the text contains any metric or imperial measurement."""
    return any(pattern.search(text) for pattern in UNIT_PATTERNS.values())
