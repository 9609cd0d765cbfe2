"""
Data models for the Recipe Generator.

These models define the core entities used throughout the system:
- RecipeRequest: What the user asked for (ingredients, preferences, meal type, calories)
- GeneratedRecipe: A recipe parsed from LLM markdown or produced by the mock generator
- NutritionData / EnhancedNutritionData: Flat and nested nutrition payload variants
- Recipe: A favourite recipe persisted for a user
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")
MIN_RECIPE_INGREDIENTS = 3
DEFAULT_CALORIES = 500


class InvalidRequestError(ValueError):
    """Raised when a client request is missing required fields."""


@dataclass
class RecipeRequest:
    """A recipe or nutrition request from the client."""
    ingredients: List[str]
    preferences: str = ""
    meal_type: str = "dinner"
    calories: int = DEFAULT_CALORIES

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RecipeRequest":
        """
        Build a request from a JSON body (camelCase or snake_case keys).

        Raises:
            InvalidRequestError: If the body is not an object, ingredients is not a
                list, or calories is not a number
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise InvalidRequestError("Request body must be a JSON object")

        ingredients = data.get("ingredients")
        if not isinstance(ingredients, list):
            raise InvalidRequestError("Ingredients are required")

        meal_type = str(data.get("mealType") or data.get("meal_type") or "dinner").lower()

        calories = data.get("calories", DEFAULT_CALORIES)
        try:
            calories = int(float(calories)) if calories is not None else DEFAULT_CALORIES
        except (TypeError, ValueError, OverflowError):
            raise InvalidRequestError(f"Invalid calories value: {calories!r}")

        return cls(
            ingredients=[str(i).strip() for i in ingredients if str(i).strip()],
            preferences=str(data.get("preferences") or ""),
            meal_type=meal_type,
            calories=calories,
        )


@dataclass
class NutritionData:
    """Flat nutrition payload; the canonical shape consumed by the validator."""
    calories: int
    protein: float
    carbs: float
    fat: float
    fiber: Optional[float] = None
    sugar: Optional[float] = None
    vitamins: Dict[str, float] = field(default_factory=dict)
    minerals: Dict[str, float] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.calories} kcal ({self.protein}g protein, {self.carbs}g carbs, {self.fat}g fat)"

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        data = {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
            "sugar": self.sugar,
        }
        if self.vitamins:
            data["vitamins"] = dict(self.vitamins)
        if self.minerals:
            data["minerals"] = dict(self.minerals)
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "NutritionData":
        """Create from dictionary."""
        return cls(
            calories=_number(data.get("calories")),
            protein=_number(data.get("protein")),
            carbs=_number(data.get("carbs")),
            fat=_number(data.get("fat")),
            fiber=data.get("fiber"),
            sugar=data.get("sugar"),
            vitamins=dict(data.get("vitamins") or {}),
            minerals=dict(data.get("minerals") or {}),
        )


@dataclass
class Macronutrients:
    """Macronutrient block of the nested nutrition payload (grams, mg for cholesterol/sodium)."""
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: Optional[float] = None
    sugar: Optional[float] = None
    saturated_fat: Optional[float] = None
    unsaturated_fat: Optional[float] = None
    cholesterol: Optional[float] = None
    sodium: Optional[float] = None

    def to_dict(self) -> Dict:
        return {
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
            "sugar": self.sugar,
            "saturatedFat": self.saturated_fat,
            "unsaturatedFat": self.unsaturated_fat,
            "cholesterol": self.cholesterol,
            "sodium": self.sodium,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Macronutrients":
        return cls(
            protein=_number(data.get("protein")),
            carbs=_number(data.get("carbs")),
            fat=_number(data.get("fat")),
            fiber=data.get("fiber"),
            sugar=data.get("sugar"),
            saturated_fat=data.get("saturatedFat", data.get("saturated_fat")),
            unsaturated_fat=data.get("unsaturatedFat", data.get("unsaturated_fat")),
            cholesterol=data.get("cholesterol"),
            sodium=data.get("sodium"),
        )


@dataclass
class EnhancedNutritionData:
    """Nested nutrition payload, as requested from the LLM.

    Vitamin and mineral values are percentages of the daily recommended value.
    """
    calories: int
    macronutrients: Macronutrients
    vitamins: Dict[str, float] = field(default_factory=dict)
    minerals: Dict[str, float] = field(default_factory=dict)
    serving_size: str = "1 serving"
    servings: int = 1

    def to_flat(self) -> NutritionData:
        """Collapse to the flat canonical shape."""
        return NutritionData(
            calories=self.calories,
            protein=self.macronutrients.protein,
            carbs=self.macronutrients.carbs,
            fat=self.macronutrients.fat,
            fiber=self.macronutrients.fiber,
            sugar=self.macronutrients.sugar,
            vitamins=dict(self.vitamins),
            minerals=dict(self.minerals),
        )

    def to_dict(self) -> Dict:
        return {
            "calories": self.calories,
            "macronutrients": self.macronutrients.to_dict(),
            "vitamins": dict(self.vitamins),
            "minerals": dict(self.minerals),
            "servingSize": self.serving_size,
            "servings": self.servings,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "EnhancedNutritionData":
        return cls(
            calories=_number(data.get("calories")),
            macronutrients=Macronutrients.from_dict(data.get("macronutrients") or {}),
            vitamins=dict(data.get("vitamins") or {}),
            minerals=dict(data.get("minerals") or {}),
            serving_size=data.get("servingSize", data.get("serving_size", "1 serving")),
            servings=data.get("servings", 1),
        )


@dataclass
class GeneratedRecipe:
    """Structured recipe extracted from markdown (or fabricated by the mock generator).

    Fields the markdown did not provide stay None or empty.
    """
    title: str = "Generated Recipe"
    ingredients: List[str] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    calories: Optional[int] = None
    cooking_time: Optional[str] = None  # e.g. "25 minutes"
    markdown: str = ""
    nutrition: Optional[NutritionData] = None

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        data = {
            "title": self.title,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "calories": self.calories,
            "cooking_time": self.cooking_time,
            "markdown": self.markdown,
        }
        if self.nutrition is not None:
            data["nutritionData"] = self.nutrition.to_dict()
        return data


@dataclass
class Recipe:
    """A favourite recipe saved by a user."""

    user_id: int
    title: str
    ingredients: List[str]
    instructions: List[str]
    markdown: str = ""
    calories: Optional[int] = None
    cooking_time: Optional[str] = None
    nutrition_data: Optional[Dict[str, Any]] = None  # Opaque; either payload shape
    meal_type: Optional[str] = None
    id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.title} ({self.calories or '?'} kcal)"

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "calories": self.calories,
            "cooking_time": self.cooking_time,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "markdown": self.markdown,
            "nutrition_data": self.nutrition_data,
            "meal_type": self.meal_type,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Recipe":
        """Create from dictionary."""
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)

        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            title=data.get("title") or "Untitled Recipe",
            calories=data.get("calories"),
            cooking_time=data.get("cooking_time"),
            ingredients=list(data.get("ingredients") or []),
            instructions=list(data.get("instructions") or []),
            markdown=data.get("markdown") or "",
            nutrition_data=data.get("nutrition_data"),
            meal_type=data.get("meal_type"),
            created_at=created_at or datetime.now(),
        )


def _number(value: Any) -> float:
    """Coerce a JSON value to a number, treating missing/invalid as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0
