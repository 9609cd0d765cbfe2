"""
Database interface for the Recipe Generator.

Manages one SQLite database (recipes.db) with:
- users: accounts for session login
- favorite_recipes: recipes saved by a user; one title per user
"""

import sqlite3
import json
import logging
import uuid
from typing import List, Optional, Dict, Any
from datetime import datetime
from pathlib import Path

from .models import Recipe

logger = logging.getLogger(__name__)

# Postgres unique_violation; reported for duplicate saves so clients can match on it
DUPLICATE_KEY_CODE = "23505"


class RecipeStoreError(Exception):
    """Raised when a favourite recipe cannot be written."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class DuplicateRecipeError(RecipeStoreError):
    """Raised when the user already saved a recipe with this title."""

    def __init__(self, title: str):
        super().__init__(f"Recipe already saved: {title}", code=DUPLICATE_KEY_CODE)
        self.title = title


class DatabaseInterface:
    """Interface for interacting with the SQLite database."""

    def __init__(self, db_dir: str = "data"):
        """
        Initialize database interface.

        Args:
            db_dir: Directory containing database files
        """
        self.db_dir = Path(db_dir)
        self.db_dir.mkdir(parents=True, exist_ok=True)

        self.db_path = self.db_dir / "recipes.db"

        self._init_database()

    def _init_database(self):
        """Initialize database schema."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()

            # Users table for authentication
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    username TEXT UNIQUE NOT NULL,
                    password_hash TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            # Favourite recipes, owned by a single user
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS favorite_recipes (
                    id TEXT PRIMARY KEY,
                    user_id INTEGER NOT NULL,
                    title TEXT NOT NULL,
                    calories INTEGER,
                    cooking_time TEXT,
                    ingredients_json TEXT NOT NULL,
                    instructions_json TEXT NOT NULL,
                    markdown TEXT,
                    nutrition_json TEXT,
                    meal_type TEXT,
                    created_at TEXT NOT NULL,
                    UNIQUE (user_id, title),
                    FOREIGN KEY (user_id) REFERENCES users(id)
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_favorite_recipes_user
                ON favorite_recipes (user_id, created_at)
            """)

            conn.commit()
            logger.info("Recipe database initialized")

    # ==================== Favourite Recipe Operations ====================

    def save_favorite_recipe(self, recipe: Recipe) -> str:
        """
        Save a favourite recipe.

        Args:
            recipe: Recipe to save; an id is assigned if missing

        Returns:
            ID of saved recipe

        Raises:
            DuplicateRecipeError: If the user already saved a recipe with this title
            RecipeStoreError: On any other database failure
        """
        if not recipe.id:
            recipe.id = f"rec_{uuid.uuid4().hex[:12]}"

        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    INSERT INTO favorite_recipes
                    (id, user_id, title, calories, cooking_time, ingredients_json,
                     instructions_json, markdown, nutrition_json, meal_type, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        recipe.id,
                        recipe.user_id,
                        recipe.title,
                        recipe.calories,
                        recipe.cooking_time,
                        json.dumps(recipe.ingredients),
                        json.dumps(recipe.instructions),
                        recipe.markdown,
                        json.dumps(recipe.nutrition_data) if recipe.nutrition_data is not None else None,
                        recipe.meal_type,
                        recipe.created_at.isoformat(),
                    ),
                )
                conn.commit()
        except sqlite3.IntegrityError as e:
            if "UNIQUE" in str(e) and "favorite_recipes.id" not in str(e):
                logger.warning(f"Duplicate favourite for user {recipe.user_id}: {recipe.title}")
                raise DuplicateRecipeError(recipe.title) from e
            raise RecipeStoreError(str(e)) from e
        except sqlite3.Error as e:
            logger.error(f"Error saving recipe {recipe.id}: {e}")
            raise RecipeStoreError(str(e)) from e

        logger.info(f"Saved favourite recipe {recipe.id} for user {recipe.user_id}")
        return recipe.id

    def get_favorite_recipes(self, user_id: int) -> List[Recipe]:
        """
        Get all favourite recipes for a user, newest first.

        Args:
            user_id: Owner of the recipes

        Returns:
            List of Recipe objects
        """
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.cursor()
            cursor.execute(
                "SELECT * FROM favorite_recipes WHERE user_id = ? ORDER BY created_at DESC",
                (user_id,)
            )
            return [self._row_to_recipe(row) for row in cursor.fetchall()]

    def get_favorite_recipe(self, recipe_id: str, user_id: int) -> Optional[Recipe]:
        """
        Get a favourite recipe by ID.

        Args:
            recipe_id: Recipe ID
            user_id: Owner; other users' recipes are not visible

        Returns:
            Recipe object or None
        """
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.cursor()
            cursor.execute(
                "SELECT * FROM favorite_recipes WHERE id = ? AND user_id = ?",
                (recipe_id, user_id)
            )
            row = cursor.fetchone()
            return self._row_to_recipe(row) if row else None

    def delete_favorite_recipe(self, recipe_id: str, user_id: int) -> bool:
        """
        Delete a favourite recipe.

        Args:
            recipe_id: Recipe ID
            user_id: Owner; deleting another user's recipe is a no-op

        Returns:
            True if a recipe was deleted
        """
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM favorite_recipes WHERE id = ? AND user_id = ?",
                (recipe_id, user_id)
            )
            conn.commit()
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted favourite recipe {recipe_id} for user {user_id}")
        else:
            logger.warning(f"No favourite recipe {recipe_id} for user {user_id}")
        return deleted

    def _row_to_recipe(self, row: sqlite3.Row) -> Recipe:
        """Convert database row to Recipe object."""
        nutrition_data = None
        if row["nutrition_json"]:
            try:
                nutrition_data = json.loads(row["nutrition_json"])
            except (json.JSONDecodeError, TypeError) as e:
                logger.warning(f"Failed to parse nutrition for recipe {row['id']}: {e}")

        return Recipe(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            calories=row["calories"],
            cooking_time=row["cooking_time"],
            ingredients=json.loads(row["ingredients_json"]),
            instructions=json.loads(row["instructions_json"]),
            markdown=row["markdown"] or "",
            nutrition_data=nutrition_data,
            meal_type=row["meal_type"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    # ==================== User Authentication Operations ====================

    def create_user(self, username: str, password_hash: str) -> Optional[int]:
        """
        Create a new user.

        Args:
            username: Unique username
            password_hash: Hashed password (use werkzeug.security.generate_password_hash)

        Returns:
            User ID if created, None if username already exists
        """
        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    INSERT INTO users (username, password_hash, created_at)
                    VALUES (?, ?, ?)
                    """,
                    (username, password_hash, datetime.now().isoformat())
                )
                conn.commit()
                user_id = cursor.lastrowid
                logger.info(f"Created user: {username} (ID: {user_id})")
                return user_id
        except sqlite3.IntegrityError:
            logger.warning(f"Username already exists: {username}")
            return None

    def get_user_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        """
        Get user by username.

        Returns:
            Dict with id, username, password_hash, created_at or None if not found
        """
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, username, password_hash, created_at FROM users WHERE username = ?",
                (username,)
            )
            row = cursor.fetchone()
            if row:
                return dict(row)
            return None

    def get_user_by_id(self, user_id: int) -> Optional[Dict[str, Any]]:
        """
        Get user by ID.

        Returns:
            Dict with id, username, password_hash, created_at or None if not found
        """
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, username, password_hash, created_at FROM users WHERE id = ?",
                (user_id,)
            )
            row = cursor.fetchone()
            if row:
                return dict(row)
            return None
