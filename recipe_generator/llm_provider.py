"""
LLM Provider Abstraction.

Provides a unified interface for text-generation calls that can be swapped between:
- AnthropicProvider: Real Claude Messages API calls
- NullLLMProvider: Offline stub for tests and keyless development

Recipe and nutrition requests both go through ``create_message`` and read the
text of the first content block via ``first_text``.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Any, Dict, NoReturn
import os
import logging

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-3-haiku-20240307"


class LLMUnavailableError(RuntimeError):
    """Raised when a request needs a real LLM but only the null provider is configured."""


def first_text(response: Any) -> str:
    """
    Return the text of the first content block of a Messages API response.

    Raises:
        ValueError: If the response carries no text content
    """
    content = getattr(response, "content", None) or []
    if not content:
        raise ValueError("LLM response contained no content blocks")

    text = getattr(content[0], "text", None)
    if not text:
        raise ValueError("LLM response first content block has no text")
    return text


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    def create_message(
        self,
        model: str,
        max_tokens: int,
        messages: List[Dict[str, Any]],
        system: Optional[str] = None,
        **kwargs
    ) -> Any:
        """Create a message/completion request."""
        pass

    @property
    @abstractmethod
    def is_null(self) -> bool:
        """Return True if this is a null/mock provider."""
        pass


class AnthropicProvider(LLMProvider):
    """Real Anthropic Claude API provider."""

    def __init__(self, api_key: Optional[str] = None):
        from anthropic import Anthropic
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise ValueError("ANTHROPIC_API_KEY required for AnthropicProvider")
        self.client = Anthropic(api_key=self.api_key)

    def create_message(
        self,
        model: str,
        max_tokens: int,
        messages: List[Dict[str, Any]],
        system: Optional[str] = None,
        **kwargs
    ) -> Any:
        params = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": messages,
        }
        if system:
            params["system"] = system
        params.update(kwargs)
        return self.client.messages.create(**params)

    @property
    def is_null(self) -> bool:
        return False


class NullLLMProvider(LLMProvider):
    """
    NullLLMProvider never talks to a model.

    It records call boundaries and raises ``LLMUnavailableError`` so callers
    take their mock fallback path, exactly as they would for an outage.
    """

    def __init__(self):
        self.call_count = 0
        self.last_messages = None
        self.last_model = None
        self.last_system = None
        logger.info("NullLLMProvider initialized - LLM calls will fall back to mock generators")

    def create_message(
        self,
        model: str,
        max_tokens: int,
        messages: List[Dict[str, Any]],
        system: Optional[str] = None,
        **kwargs
    ) -> NoReturn:
        """
        Record the call, then fail.

        Raises:
            LLMUnavailableError: Always
        """
        self.call_count += 1
        self.last_messages = messages
        self.last_model = model
        self.last_system = system

        logger.debug(f"NullLLM call #{self.call_count}: model={model}, messages={len(messages)}")
        raise LLMUnavailableError("No LLM configured (set ANTHROPIC_API_KEY)")

    @property
    def is_null(self) -> bool:
        return True


def get_llm_provider(
    api_key: Optional[str] = None,
    use_null: bool = False
) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        api_key: Optional API key (uses env var if not provided)
        use_null: Force use of NullLLMProvider (for testing)

    Returns:
        LLMProvider instance

    Environment Variables:
        USE_NULL_LLM: Set to "true" to use NullLLMProvider
        ANTHROPIC_API_KEY: API key for AnthropicProvider
    """
    if use_null or os.environ.get("USE_NULL_LLM", "").lower() == "true":
        return NullLLMProvider()

    # Fall back to null if no API key; recipes then come from the mock generators
    api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        logger.warning("No ANTHROPIC_API_KEY found, using NullLLMProvider")
        return NullLLMProvider()

    return AnthropicProvider(api_key=api_key)
