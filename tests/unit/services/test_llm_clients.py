"""Unit tests for language model clients and provider selection.

SDK clients are replaced with mocks; no network calls are made.
"""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from gitcal.config import Settings
from gitcal.services.llm import (
    AnthropicLanguageModelClient,
    LanguageModelConfigError,
    OpenAILanguageModelClient,
    build_language_model_client,
    extract_text,
)


def _settings(**overrides) -> Settings:
    values = {
        "llm_provider": "anthropic",
        "anthropic_api_key": "sk-ant-test",
        "openai_api_key": "",
        "llm_model": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


# ═══════════════════════════════════════════════════════════════════════════
# Anthropic
# ═══════════════════════════════════════════════════════════════════════════


class TestAnthropicClient:
    def setup_method(self):
        self.llm = AnthropicLanguageModelClient(api_key="sk-ant-test", max_tokens=1000)
        self.sdk = MagicMock()
        self.sdk.messages.create = AsyncMock()
        self.llm._client = self.sdk

    @pytest.mark.asyncio
    async def test_sends_single_user_message(self):
        message = SimpleNamespace(content=[SimpleNamespace(type="text", text="Summary")])
        self.sdk.messages.create.return_value = message

        raw = await self.llm.generate("Summarize")

        assert raw is message
        self.sdk.messages.create.assert_awaited_once_with(
            model="claude-sonnet-4-20250514",
            max_tokens=1000,
            messages=[{"role": "user", "content": "Summarize"}],
        )
        assert extract_text(raw) == "Summary"

    @pytest.mark.asyncio
    async def test_provider_error_becomes_error_text(self):
        self.sdk.messages.create.side_effect = RuntimeError("overloaded")

        raw = await self.llm.generate("Summarize")

        assert extract_text(raw) == "Error generating response: overloaded"

    @pytest.mark.asyncio
    async def test_timeout_becomes_error_text(self):
        async def slow(**_kwargs):
            await asyncio.sleep(1)

        self.sdk.messages.create.side_effect = slow
        self.llm.timeout = 0.01

        raw = await self.llm.generate("Summarize")

        assert extract_text(raw).startswith("Error generating response: Request timed out")

    def test_missing_api_key_raises_config_error(self):
        with pytest.raises(LanguageModelConfigError, match="API key is missing"):
            AnthropicLanguageModelClient(api_key="")

    def test_model_override(self):
        llm = AnthropicLanguageModelClient(api_key="k", model="claude-3-5-haiku-latest")
        assert llm.model == "claude-3-5-haiku-latest"


# ═══════════════════════════════════════════════════════════════════════════
# OpenAI
# ═══════════════════════════════════════════════════════════════════════════


class TestOpenAIClient:
    def setup_method(self):
        self.llm = OpenAILanguageModelClient(api_key="sk-test")
        self.sdk = MagicMock()
        self.sdk.chat.completions.create = AsyncMock()
        self.llm._client = self.sdk

    @pytest.mark.asyncio
    async def test_returns_first_choice_message(self):
        message = SimpleNamespace(role="assistant", content="Plain summary")
        self.sdk.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=message)]
        )

        raw = await self.llm.generate("Summarize")

        assert raw is message
        kwargs = self.sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["max_tokens"] == 1000
        assert extract_text(raw) == "Plain summary"

    @pytest.mark.asyncio
    async def test_provider_error_becomes_error_text(self):
        self.sdk.chat.completions.create.side_effect = ValueError("bad request")

        raw = await self.llm.generate("Summarize")

        assert extract_text(raw) == "Error generating response: bad request"


# ═══════════════════════════════════════════════════════════════════════════
# build_language_model_client
# ═══════════════════════════════════════════════════════════════════════════


class TestBuildLanguageModelClient:
    def test_defaults_to_anthropic(self):
        llm = build_language_model_client(_settings())
        assert isinstance(llm, AnthropicLanguageModelClient)
        assert llm.api_key == "sk-ant-test"

    def test_selects_openai(self):
        llm = build_language_model_client(
            _settings(llm_provider="OpenAI", openai_api_key="sk-test", llm_model="gpt-4o-mini")
        )
        assert isinstance(llm, OpenAILanguageModelClient)
        assert llm.model == "gpt-4o-mini"

    def test_passes_limits_through(self):
        llm = build_language_model_client(
            _settings(llm_max_tokens=512, llm_timeout_seconds=5.0)
        )
        assert llm.max_tokens == 512
        assert llm.timeout == 5.0

    def test_unknown_provider_raises(self):
        with pytest.raises(LanguageModelConfigError, match="Unknown LLM provider"):
            build_language_model_client(_settings(llm_provider="mystery"))

    def test_missing_key_for_selected_provider_raises(self):
        with pytest.raises(LanguageModelConfigError):
            build_language_model_client(_settings(llm_provider="openai"))
