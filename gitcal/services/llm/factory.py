"""Select the language model provider from configuration."""

import logging

from gitcal.config import Settings
from gitcal.services.llm.anthropic_client import AnthropicLanguageModelClient
from gitcal.services.llm.base import BaseLanguageModelClient, LanguageModelConfigError
from gitcal.services.llm.openai_client import OpenAILanguageModelClient

logger = logging.getLogger(__name__)

PROVIDERS: dict[str, type[BaseLanguageModelClient]] = {
    "anthropic": AnthropicLanguageModelClient,
    "openai": OpenAILanguageModelClient,
}


def build_language_model_client(config: Settings) -> BaseLanguageModelClient:
    """
    Construct the configured provider client.

    Raises:
        LanguageModelConfigError: If the provider is unknown or its API key is unset
    """
    provider = config.llm_provider.strip().lower()
    client_cls = PROVIDERS.get(provider)
    if client_cls is None:
        raise LanguageModelConfigError(
            f"Unknown LLM provider {config.llm_provider!r}. Expected one of: {', '.join(PROVIDERS)}"
        )

    api_key = config.anthropic_api_key if provider == "anthropic" else config.openai_api_key
    client = client_cls(
        api_key=api_key,
        model=config.llm_model or None,
        max_tokens=config.llm_max_tokens,
        timeout=config.llm_timeout_seconds,
    )
    logger.info(f"Using {provider} language model {client.model}")
    return client
