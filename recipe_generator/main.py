#!/usr/bin/env python3
"""
Command-line entry point for the Recipe Generator.

    recipe-generator serve --port 5000
    recipe-generator generate chicken rice broccoli --meal-type dinner --calories 600
    recipe-generator convert "200g chicken" "1 l milk" --to imperial
"""

import argparse
import json

from recipe_generator.config import Config
from recipe_generator.data.models import MEAL_TYPES, InvalidRequestError, RecipeRequest
from recipe_generator.llm_provider import get_llm_provider
from recipe_generator.nutrition_validator import assess_nutrition
from recipe_generator.recipe_service import RecipeService
from recipe_generator.unit_conversion import UNIT_SYSTEMS, convert_ingredients
from recipe_generator.web.app import configure_logging, create_app


def serve(config: Config, host: str, port: int, debug: bool):
    """Run the Flask development server."""
    create_app(config).run(host=host, port=port, debug=debug)


def generate(config: Config, request: RecipeRequest, as_json: bool):
    """Generate one recipe and print it."""
    llm = get_llm_provider(api_key=config.anthropic_api_key, use_null=config.use_null_llm)
    service = RecipeService(llm, model=config.model, max_tokens=config.max_tokens)

    result = service.generate_recipe(request)
    recipe = result.recipe

    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    if result.is_mock:
        print(f"⚠️  LLM unavailable, showing a sample recipe ({result.api_error})\n")
    print(recipe.markdown)

    if recipe.nutrition is not None:
        assessment = assess_nutrition(recipe.ingredients, recipe.nutrition)
        if assessment.warning:
            print(f"\n⚠️  {assessment.warning}")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Recipe Generator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the web API")
    serve_parser.add_argument("--host", type=str, default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=5000)
    serve_parser.add_argument("--debug", action="store_true")

    generate_parser = subparsers.add_parser("generate", help="Generate a recipe")
    generate_parser.add_argument("ingredients", nargs="+", help="At least 3 ingredients")
    generate_parser.add_argument("--preferences", type=str, default="")
    generate_parser.add_argument(
        "--meal-type",
        choices=MEAL_TYPES,
        default="dinner",
        help="Meal type (default: dinner)",
    )
    generate_parser.add_argument("--calories", type=int, default=500)
    generate_parser.add_argument("--json", action="store_true", help="Print the JSON response")

    convert_parser = subparsers.add_parser("convert", help="Convert ingredient measurements")
    convert_parser.add_argument("ingredients", nargs="+")
    convert_parser.add_argument("--to", choices=UNIT_SYSTEMS, required=True)

    args = parser.parse_args()
    config = Config.from_env()

    if args.command == "serve":
        configure_logging(config.log_dir, config.log_level)
        serve(config, args.host, args.port, args.debug)

    elif args.command == "generate":
        try:
            request = RecipeRequest.from_dict({
                "ingredients": args.ingredients,
                "preferences": args.preferences,
                "mealType": args.meal_type,
                "calories": args.calories,
            })
            generate(config, request, args.json)
        except InvalidRequestError as e:
            print(f"❌ Error: {e}")
            return

    elif args.command == "convert":
        for line in convert_ingredients(args.ingredients, args.to):
            print(line)


if __name__ == "__main__":
    main()
