"""
Recipe and nutrition generation with a single mock fallback.

Each request makes exactly one LLM call. If the call fails, returns no
text, or the nutrition JSON cannot be parsed, the mock generators step in
and the result is flagged ``is_mock`` so the UI can disclose it. The
operation as a whole still succeeds.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from recipe_generator.data.models import (
    MIN_RECIPE_INGREDIENTS,
    GeneratedRecipe,
    InvalidRequestError,
    RecipeRequest,
)
from recipe_generator.llm_provider import DEFAULT_MODEL, LLMProvider, first_text
from recipe_generator.markdown_parser import parse_recipe_markdown
from recipe_generator.mock_generators import generate_mock_nutrition, generate_mock_recipe
from recipe_generator.prompts import (
    NUTRITION_SYSTEM_PROMPT,
    RECIPE_SYSTEM_PROMPT,
    build_nutrition_message,
    build_recipe_message,
)

logger = logging.getLogger(__name__)

JSON_FENCE_PATTERN = re.compile(r"```json\s*([\s\S]*?)\s*```")
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


@dataclass
class GenerationResult:
    """Outcome of a recipe request."""
    recipe: GeneratedRecipe
    is_mock: bool = False
    api_error: Optional[str] = None

    def to_dict(self) -> Dict:
        result = {"success": True, "recipe": self.recipe.to_dict()}
        if self.is_mock:
            result["isMock"] = True
            result["apiError"] = self.api_error
        return result


@dataclass
class NutritionResult:
    """Outcome of a nutrition request; nutrition_data is the raw payload dict."""
    nutrition_data: Dict[str, Any]
    is_mock: bool = False
    api_error: Optional[str] = None

    def to_dict(self) -> Dict:
        result = {"success": True, "nutritionData": self.nutrition_data}
        if self.is_mock:
            result["isMock"] = True
            result["apiError"] = self.api_error
        return result


def extract_json_block(text: str) -> str:
    """
    Pull the JSON document out of a model reply.

    Tries a ```json fence, then the outermost {...}, then the whole text.
    """
    fenced = JSON_FENCE_PATTERN.search(text)
    if fenced:
        return fenced.group(1).strip()

    braces = JSON_OBJECT_PATTERN.search(text)
    if braces:
        return braces.group(0).strip()

    return text.replace("```", "").strip()


def parse_nutrition_response(text: str) -> Dict[str, Any]:
    """
    Parse the nutrition JSON from a model reply.

    Raises:
        ValueError: If no JSON object can be decoded (json.JSONDecodeError is a ValueError)
    """
    data = json.loads(extract_json_block(text))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


class RecipeService:
    """Builds prompts, calls the LLM once, and falls back to mock output."""

    def __init__(self, llm: LLMProvider, model: str = DEFAULT_MODEL, max_tokens: int = 1024):
        """
        Initialize the service.

        Args:
            llm: LLM provider (AnthropicProvider or NullLLMProvider)
            model: Model name passed to the provider
            max_tokens: Response token limit per request
        """
        self.llm = llm
        self.model = model
        self.max_tokens = max_tokens

    def _complete(self, system: str, user_message: str) -> str:
        response = self.llm.create_message(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system,
            messages=[{"role": "user", "content": user_message}],
        )
        return first_text(response)

    def generate_recipe(self, request: RecipeRequest) -> GenerationResult:
        """
        Generate a recipe for the request.

        Raises:
            InvalidRequestError: If fewer than 3 ingredients were given
        """
        if len(request.ingredients) < MIN_RECIPE_INGREDIENTS:
            raise InvalidRequestError(f"At least {MIN_RECIPE_INGREDIENTS} ingredients are required")

        logger.info(
            f"Generating {request.meal_type} recipe: ingredients={request.ingredients}, "
            f"calories={request.calories}"
        )

        try:
            markdown = self._complete(RECIPE_SYSTEM_PROMPT, build_recipe_message(request))
            recipe = parse_recipe_markdown(markdown)
            logger.info(f"Generated recipe: {recipe.title}")
            return GenerationResult(recipe=recipe)
        except Exception as e:
            logger.error(f"LLM recipe generation failed, using mock recipe: {e}")
            recipe = generate_mock_recipe(
                request.ingredients, request.preferences, request.meal_type, request.calories
            )
            return GenerationResult(recipe=recipe, is_mock=True, api_error=str(e))

    def get_nutrition(self, request: RecipeRequest) -> NutritionResult:
        """
        Get a nutrition breakdown for the request's ingredients.

        Raises:
            InvalidRequestError: If no ingredients were given
        """
        if not request.ingredients:
            raise InvalidRequestError("Ingredients are required")

        try:
            text = self._complete(NUTRITION_SYSTEM_PROMPT, build_nutrition_message(request))
        except Exception as e:
            logger.error(f"LLM nutrition request failed, using mock nutrition: {e}")
            return NutritionResult(
                nutrition_data=generate_mock_nutrition(request.calories).to_dict(),
                is_mock=True,
                api_error=str(e),
            )

        try:
            return NutritionResult(nutrition_data=parse_nutrition_response(text))
        except ValueError as e:
            logger.error(f"Error parsing nutrition data, using mock nutrition: {e}")
            return NutritionResult(
                nutrition_data=generate_mock_nutrition(request.calories).to_dict(),
                is_mock=True,
                api_error=f"Unparseable nutrition response: {e}",
            )
