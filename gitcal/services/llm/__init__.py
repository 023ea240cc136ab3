"""Language model providers and response normalization.

Quick start:
    from gitcal.config import settings
    from gitcal.services.llm import build_language_model_client, extract_text

    client = build_language_model_client(settings)
    text = extract_text(await client.generate("Summarize this diff ..."))
"""

from .anthropic_client import AnthropicLanguageModelClient
from .base import (
    ERROR_PREFIX,
    BaseLanguageModelClient,
    LanguageModelConfigError,
    RawResponse,
    error_response,
)
from .factory import build_language_model_client
from .normalizer import COMMIT_SUMMARY_FALLBACK, DAILY_SUMMARY_FALLBACK, extract_text
from .openai_client import OpenAILanguageModelClient

__all__ = [
    "AnthropicLanguageModelClient",
    "BaseLanguageModelClient",
    "COMMIT_SUMMARY_FALLBACK",
    "DAILY_SUMMARY_FALLBACK",
    "ERROR_PREFIX",
    "LanguageModelConfigError",
    "OpenAILanguageModelClient",
    "RawResponse",
    "build_language_model_client",
    "error_response",
    "extract_text",
]
