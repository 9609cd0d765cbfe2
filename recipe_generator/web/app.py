#!/usr/bin/env python3
"""
Flask web application for the Recipe Generator.

JSON API for generating recipes from ingredients, fetching nutrition
breakdowns, checking nutrition plausibility, converting units, and keeping
a per-user list of favourite recipes.

Dependencies (database, LLM provider) are built once at bootstrap and passed
to ``create_app``; routes read them from ``app.extensions``.
"""

import os
import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
from functools import wraps
from typing import Optional

from flask import Blueprint, Flask, current_app, jsonify, request, session
from flask_cors import CORS
from werkzeug.security import generate_password_hash, check_password_hash

from recipe_generator.config import Config
from recipe_generator.data.database import DatabaseInterface, DuplicateRecipeError, RecipeStoreError
from recipe_generator.data.models import InvalidRequestError, Recipe, RecipeRequest
from recipe_generator.llm_provider import LLMProvider, get_llm_provider
from recipe_generator.nutrition_validator import assess_nutrition
from recipe_generator.recipe_service import RecipeService
from recipe_generator.unit_conversion import UNIT_SYSTEMS, convert_ingredients

logger = logging.getLogger(__name__)

EXTENSION_KEY = "recipe_generator"
NUTRITION_KEYS = ("enhancedNutrition", "nutrition_data", "nutritionData")

api = Blueprint("api", __name__)


def configure_logging(log_dir: str = "logs", level: str = "INFO"):
    """Setup logging with both console and file output."""
    os.makedirs(log_dir, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),  # Console output
            RotatingFileHandler(
                os.path.join(log_dir, 'app.log'),
                maxBytes=10*1024*1024,  # 10MB
                backupCount=5
            )
        ]
    )


def create_app(
    config: Optional[Config] = None,
    db: Optional[DatabaseInterface] = None,
    llm: Optional[LLMProvider] = None,
) -> Flask:
    """
    Build the Flask app.

    Args:
        config: Runtime settings (defaults to Config.from_env())
        db: Database interface (defaults to one under config.db_dir)
        llm: LLM provider (defaults to get_llm_provider from config)
    """
    config = config or Config.from_env()
    db = db or DatabaseInterface(db_dir=config.db_dir)
    llm = llm or get_llm_provider(api_key=config.anthropic_api_key, use_null=config.use_null_llm)

    app = Flask(__name__)
    app.secret_key = config.secret_key
    CORS(app)

    app.extensions[EXTENSION_KEY] = {
        "config": config,
        "db": db,
        "service": RecipeService(llm, model=config.model, max_tokens=config.max_tokens),
    }
    app.register_blueprint(api)

    logger.info(f"Recipe Generator app created (model={config.model}, null_llm={llm.is_null})")
    return app


def _db() -> DatabaseInterface:
    return current_app.extensions[EXTENSION_KEY]["db"]


def _service() -> RecipeService:
    return current_app.extensions[EXTENSION_KEY]["service"]


def _json_object() -> dict:
    """
    JSON object body; an empty dict when there is none.

    Raises:
        InvalidRequestError: If the body is JSON but not an object
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return data


def _body() -> dict:
    """JSON body, or form fields for plain HTML form posts."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


@api.errorhandler(InvalidRequestError)
def handle_invalid_request(e):
    return jsonify({"success": False, "error": str(e)}), 400


def login_required(f):
    """Decorator to require login for API routes."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'user_id' not in session:
            return jsonify({"success": False, "error": "Authentication required"}), 401
        return f(*args, **kwargs)
    return decorated_function


# ==================== Auth ====================

@api.route('/register', methods=['POST'])
def register():
    """Create an account and log in."""
    data = _body()
    username = str(data.get('username', '')).strip()
    password = str(data.get('password', ''))

    if not username or not password:
        return jsonify({"success": False, "error": "Username and password are required"}), 400

    if len(username) < 3:
        return jsonify({"success": False, "error": "Username must be at least 3 characters"}), 400

    if len(password) < 4:
        return jsonify({"success": False, "error": "Password must be at least 4 characters"}), 400

    confirm_password = data.get('confirm_password')
    if confirm_password is not None and confirm_password != password:
        return jsonify({"success": False, "error": "Passwords do not match"}), 400

    user_id = _db().create_user(username, generate_password_hash(password))
    if not user_id:
        return jsonify({"success": False, "error": "Username already taken"}), 409

    logger.info(f"New user registered: {username} (ID: {user_id})")
    session['username'] = username
    session['user_id'] = user_id
    return jsonify({"success": True, "user": {"id": user_id, "username": username}}), 201


@api.route('/login', methods=['POST'])
def login():
    """Log in with username and password."""
    data = _body()
    username = str(data.get('username', '')).strip()
    password = str(data.get('password', ''))

    user = _db().get_user_by_username(username)
    if user and check_password_hash(user['password_hash'], password):
        session['username'] = username
        session['user_id'] = user['id']
        logger.info(f"User {username} (ID: {user['id']}) logged in")
        return jsonify({"success": True, "user": {"id": user['id'], "username": username}})

    logger.warning(f"Failed login for {username}")
    return jsonify({"success": False, "error": "Invalid username or password"}), 401


@api.route('/logout', methods=['GET', 'POST'])
def logout():
    """Logout and clear session."""
    username = session.get('username', 'unknown')
    session.clear()
    logger.info(f"User {username} logged out")
    return jsonify({"success": True})


@api.route('/api/me', methods=['GET'])
@login_required
def api_current_user():
    """The logged-in user; clears a session whose user no longer exists."""
    user = _db().get_user_by_id(session['user_id'])
    if not user:
        session.clear()
        return jsonify({"success": False, "error": "Authentication required"}), 401

    return jsonify({
        "success": True,
        "user": {"id": user['id'], "username": user['username'], "created_at": user['created_at']},
    })


@api.route('/health')
def health_check():
    """Health check endpoint."""
    return jsonify({"status": "healthy", "timestamp": datetime.now().isoformat()}), 200


# ==================== Generation ====================

@api.route('/api/generate-recipe', methods=['POST'])
def api_generate_recipe():
    """Generate a recipe; falls back to a mock recipe if the LLM call fails."""
    try:
        recipe_request = RecipeRequest.from_dict(request.get_json(silent=True))
        result = _service().generate_recipe(recipe_request)
        return jsonify(result.to_dict())

    except InvalidRequestError as e:
        return jsonify({"success": False, "error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error generating recipe: {e}", exc_info=True)
        return jsonify({"success": False, "error": str(e)}), 500


@api.route('/api/nutrition', methods=['POST'])
def api_nutrition():
    """Detailed nutrition for a set of ingredients; falls back to mock nutrition."""
    try:
        recipe_request = RecipeRequest.from_dict(request.get_json(silent=True))
        result = _service().get_nutrition(recipe_request)
        return jsonify(result.to_dict())

    except InvalidRequestError as e:
        return jsonify({"success": False, "error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error getting nutrition: {e}", exc_info=True)
        return jsonify({"success": False, "error": str(e)}), 500


@api.route('/api/validate-nutrition', methods=['POST'])
def api_validate_nutrition():
    """Advisory plausibility check of nutrition against ingredient quantities."""
    data = _json_object()
    ingredients = data.get('ingredients')
    if not isinstance(ingredients, list):
        return jsonify({"success": False, "error": "Ingredients are required"}), 400

    nutrition = next((data[key] for key in NUTRITION_KEYS + ("nutrition",) if data.get(key)), None)

    try:
        assessment = assess_nutrition([str(i) for i in ingredients], nutrition)
        return jsonify({"success": True, **assessment.to_dict()})

    except Exception as e:
        logger.error(f"Error validating nutrition: {e}", exc_info=True)
        return jsonify({"success": False, "error": str(e)}), 500


@api.route('/api/convert-units', methods=['POST'])
def api_convert_units():
    """Convert ingredient measurements to metric or imperial."""
    data = _json_object()
    ingredients = data.get('ingredients')
    system = str(data.get('system') or data.get('unitSystem') or '').lower()

    if not isinstance(ingredients, list):
        return jsonify({"success": False, "error": "Ingredients are required"}), 400
    if system not in UNIT_SYSTEMS:
        return jsonify({"success": False, "error": f"System must be one of: {', '.join(UNIT_SYSTEMS)}"}), 400

    return jsonify({
        "success": True,
        "system": system,
        "ingredients": convert_ingredients([str(i) for i in ingredients], system),
    })


# ==================== Favourite Recipes ====================

@api.route('/api/recipes', methods=['GET'])
@login_required
def api_list_recipes():
    """List the current user's favourite recipes, newest first."""
    try:
        recipes = _db().get_favorite_recipes(session['user_id'])
        listing = []
        for recipe in recipes:
            item = recipe.to_dict()
            item['title'] = recipe.title or "Untitled Recipe"
            item['calories'] = recipe.calories or 0
            item['cooking_time'] = recipe.cooking_time or "Unknown"
            listing.append(item)
        return jsonify({"success": True, "recipes": listing})

    except Exception as e:
        logger.error(f"Error listing recipes: {e}", exc_info=True)
        return jsonify({"success": False, "error": str(e)}), 500


@api.route('/api/recipes', methods=['POST'])
@login_required
def api_save_recipe():
    """Save a recipe to the current user's favourites."""
    data = _json_object()
    if not isinstance(data.get('ingredients'), list) or not isinstance(data.get('instructions'), list):
        return jsonify({"success": False, "error": "Recipe ingredients and instructions are required"}), 400

    recipe = Recipe.from_dict({
        "user_id": session['user_id'],
        "title": data.get('title'),
        "calories": data.get('calories'),
        "cooking_time": data.get('cooking_time') or data.get('cookingTime'),
        "ingredients": data['ingredients'],
        "instructions": data['instructions'],
        "markdown": data.get('markdown'),
        "nutrition_data": next((data[key] for key in NUTRITION_KEYS if data.get(key)), None),
        "meal_type": data.get('meal_type') or data.get('mealType'),
    })

    try:
        recipe_id = _db().save_favorite_recipe(recipe)
        return jsonify({"success": True, "recipe": recipe.to_dict(), "id": recipe_id}), 201

    except DuplicateRecipeError as e:
        return jsonify({"success": False, "error": "You already saved this recipe", "code": e.code}), 409
    except RecipeStoreError as e:
        logger.error(f"Error saving recipe: {e}", exc_info=True)
        return jsonify({"success": False, "error": f"Failed to save recipe: {e}", "code": e.code}), 500


@api.route('/api/recipes/<recipe_id>', methods=['DELETE'])
@login_required
def api_delete_recipe(recipe_id):
    """Delete one of the current user's favourite recipes."""
    try:
        if not _db().delete_favorite_recipe(recipe_id, session['user_id']):
            return jsonify({"success": False, "error": "Recipe not found"}), 404
        return jsonify({"success": True})

    except Exception as e:
        logger.error(f"Error deleting recipe {recipe_id}: {e}", exc_info=True)
        return jsonify({"success": False, "error": str(e)}), 500


if __name__ == '__main__':
    app_config = Config.from_env()
    configure_logging(app_config.log_dir, app_config.log_level)

    # Run development server
    create_app(app_config).run(
        host='0.0.0.0',
        port=5000,
        debug=True,
    )
