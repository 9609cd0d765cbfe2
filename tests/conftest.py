"""
Pytest configuration and shared fixtures.

Fixtures are reusable test setup that can be injected into tests.
"""

import pytest
import tempfile
import shutil
from types import SimpleNamespace
from unittest.mock import MagicMock

from recipe_generator.config import Config
from recipe_generator.data.database import DatabaseInterface
from recipe_generator.data.models import Recipe
from recipe_generator.llm_provider import LLMProvider, NullLLMProvider
from recipe_generator.web.app import create_app


SAMPLE_MARKDOWN = """# Lemon Garlic Chicken

## Ingredients
- 200g chicken breast
- 150g rice
- 100g broccoli
- 1 tbsp olive oil

## Instructions
1. Season the chicken with salt and pepper.
2. Cook the rice according to package directions.
3. Sear the chicken in olive oil for 6 minutes per side.
4. Steam the broccoli and serve everything together.

## Nutrition (Estimated)
- Calories: 650 kcal
- Protein: 50g
- Carbs: 60g
- Fat: 22g

## Cooking Time
30 minutes
"""


@pytest.fixture
def temp_db_dir():
    """
    Create a temporary database directory for testing.

    This fixture is automatically cleaned up after each test.
    """
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir)


@pytest.fixture
def db(temp_db_dir):
    """
    Create a fresh DatabaseInterface for each test.

    Usage in tests:
        def test_something(db):
            db.create_user(...)
    """
    return DatabaseInterface(db_dir=temp_db_dir)


@pytest.fixture
def sample_markdown():
    """Recipe markdown in the format the model is prompted for."""
    return SAMPLE_MARKDOWN


@pytest.fixture
def sample_recipe():
    """Sample favourite recipe for user 1."""
    return Recipe(
        user_id=1,
        title="Lemon Garlic Chicken",
        ingredients=["200g chicken breast", "150g rice", "100g broccoli"],
        instructions=["Season the chicken.", "Cook the rice.", "Serve."],
        markdown=SAMPLE_MARKDOWN,
        calories=650,
        cooking_time="30 minutes",
        nutrition_data={"calories": 650, "protein": 50, "carbs": 60, "fat": 22},
        meal_type="dinner",
    )


def make_response(*texts):
    """Messages API response shape: .content is a list of text blocks."""
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=text) for text in texts])


def make_llm(*replies):
    """
    Mock LLM provider returning each reply in turn.

    A reply that is an Exception instance is raised instead of returned.
    """
    llm = MagicMock(spec=LLMProvider)
    llm.is_null = False
    llm.create_message.side_effect = [
        reply if isinstance(reply, Exception) else make_response(reply)
        for reply in replies
    ]
    return llm


@pytest.fixture
def mock_llm():
    """Factory fixture: mock_llm("reply", RuntimeError("down"), ...)."""
    return make_llm


@pytest.fixture
def test_config(temp_db_dir):
    """Config for tests; never reads the real environment."""
    return Config(
        use_null_llm=True,
        secret_key="test_secret_key",
        db_dir=temp_db_dir,
        log_dir=temp_db_dir,
    )


@pytest.fixture
def null_llm():
    return NullLLMProvider()


@pytest.fixture
def app(test_config, db, null_llm):
    """Flask app wired to a temporary database and the null LLM."""
    app = create_app(config=test_config, db=db, llm=null_llm)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Flask test client with session support."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def authenticated_client(client, db):
    """Client logged in as a freshly created user."""
    user_id = db.create_user("test_user", "not-a-real-hash")
    with client.session_transaction() as sess:
        sess['user_id'] = user_id
        sess['username'] = 'test_user'
    return client
