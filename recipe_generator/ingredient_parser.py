"""
Parse free-text ingredient lines into quantity, unit and name.

Examples:
    "100g chicken breast" -> ParsedIngredient(quantity=100.0, unit="g", name="chicken breast")
    "1/2 cup flour"       -> ParsedIngredient(quantity=0.5, unit="cup", name="flour")
    "salt to taste"       -> None

Only lines with a leading quantity are parsed. Anything else is dropped from
calorie estimation; that is expected, not an error.
"""

import math
import re
from dataclasses import dataclass
from typing import List, Optional


# "<number>[/<number>][unit] <name>"; the quantity group is optional so that
# quantity-less lines still match and can be rejected explicitly.
QUANTITY_PATTERN = re.compile(
    r'^(?:(\d+(?:\.\d+)?(?:\s*/\s*\d+)?)\s*([a-zA-Z]+)?\s+)?(.+)$'
)


@dataclass(frozen=True)
class ParsedIngredient:
    """One ingredient line split into quantity, unit and name."""
    name: str
    quantity: float
    unit: str  # Lowercased, "" when absent
    original_text: str

    def __str__(self) -> str:
        if self.unit:
            return f"{self.quantity:g} {self.unit} {self.name}"
        return f"{self.quantity:g} {self.name}"


def parse_ingredient(ingredient_text: str) -> Optional[ParsedIngredient]:
    """
    Parse a single ingredient line.

    Args:
        ingredient_text: Free-text line such as "2 tbsp olive oil"

    Returns:
        ParsedIngredient, or None when the line has no leading quantity
    """
    match = QUANTITY_PATTERN.match(ingredient_text.strip())
    if not match:
        return None

    quantity_str, unit, name = match.groups()
    if not quantity_str:
        return None

    quantity = _parse_quantity(quantity_str)
    if quantity is None:
        return None

    return ParsedIngredient(
        name=name.strip(),
        quantity=quantity,
        unit=(unit or "").lower().strip(),
        original_text=ingredient_text,
    )


def _parse_quantity(quantity_str: str) -> Optional[float]:
    """Convert "1.5" or "1/2" to a float; None for a zero denominator or an overflowing value."""
    if "/" in quantity_str:
        numerator, denominator = (float(part.strip()) for part in quantity_str.split("/"))
        if denominator == 0:
            return None
        quantity = numerator / denominator
    else:
        quantity = float(quantity_str)

    if not math.isfinite(quantity):
        return None
    return quantity


def extract_ingredients_with_quantities(ingredients: List[str]) -> List[ParsedIngredient]:
    """Parse every line and keep only those with a quantity."""
    parsed = (parse_ingredient(line) for line in ingredients)
    return [ingredient for ingredient in parsed if ingredient is not None]
