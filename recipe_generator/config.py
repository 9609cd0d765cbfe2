"""
Runtime configuration read from the environment (and a .env file, if present).

Environment Variables:
    ANTHROPIC_API_KEY: Claude API key; without it recipes come from the mock generators
    USE_NULL_LLM: "true" forces the NullLLMProvider
    RECIPE_MODEL: Model name (default claude-3-haiku-20240307)
    RECIPE_MAX_TOKENS: Response token limit (default 1024)
    FLASK_SECRET_KEY: Session signing key
    RECIPE_DB_DIR: Directory holding recipes.db (default data)
    LOG_DIR: Directory for app.log (default logs)
    LOG_LEVEL: Logging level name (default INFO)
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from recipe_generator.llm_provider import DEFAULT_MODEL

DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"


@dataclass
class Config:
    anthropic_api_key: Optional[str] = None
    use_null_llm: bool = False
    model: str = DEFAULT_MODEL
    max_tokens: int = 1024
    secret_key: str = DEFAULT_SECRET_KEY
    db_dir: str = "data"
    log_dir: str = "logs"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load .env, then build a Config from environment variables."""
        load_dotenv()
        return cls(
            anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY") or None,
            use_null_llm=os.environ.get("USE_NULL_LLM", "").lower() == "true",
            model=os.environ.get("RECIPE_MODEL", DEFAULT_MODEL),
            max_tokens=int(os.environ.get("RECIPE_MAX_TOKENS", "1024")),
            secret_key=os.environ.get("FLASK_SECRET_KEY", DEFAULT_SECRET_KEY),
            db_dir=os.environ.get("RECIPE_DB_DIR", "data"),
            log_dir=os.environ.get("LOG_DIR", "logs"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
