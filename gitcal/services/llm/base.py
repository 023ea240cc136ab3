"""Base class for language model providers.

Each provider subclass performs one outbound completion call. The base turns
every failure (auth, rate limit, network, timeout) into a synthetic
Anthropic-shaped response carrying "Error generating response: <message>",
so callers render the error as summary text instead of handling exceptions.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)

RawResponse = Any

ERROR_PREFIX = "Error generating response"


class LanguageModelConfigError(Exception):
    """Provider cannot be constructed from the current configuration."""


def error_response(message: str) -> dict[str, Any]:
    """Build the synthetic response returned when a provider call fails."""
    return {"content": [{"type": "text", "text": f"{ERROR_PREFIX}: {message}"}]}


class BaseLanguageModelClient(ABC):
    """Abstract base for all language model providers.

    Subclass this to add a provider. The base handles the timeout and
    error-to-text contract; subclasses perform the SDK call.
    """

    # Override in subclasses
    provider: str = ""
    default_model: str = ""

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        max_tokens: int = 1000,
        timeout: float = 60.0,
    ):
        if not api_key:
            raise LanguageModelConfigError(
                f"{self.provider} API key is missing. Set it in the environment or .env file."
            )
        self.api_key = api_key
        self.model = model or self.default_model
        self.max_tokens = max_tokens
        self.timeout = timeout

    @abstractmethod
    async def _complete(self, prompt: str) -> RawResponse:
        """Send the prompt to the provider and return its raw response."""
        ...

    async def generate(self, prompt: str) -> RawResponse:
        """Main entry point: generate a response, never raising."""
        try:
            return await asyncio.wait_for(self._complete(prompt), timeout=self.timeout)
        except TimeoutError:
            logger.error(f"{self.provider} call timed out after {self.timeout}s")
            return error_response(f"Request timed out after {self.timeout:g} seconds")
        except Exception as e:
            logger.error(f"{self.provider} call failed: {e}")
            return error_response(str(e))
