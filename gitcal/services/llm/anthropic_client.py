"""Anthropic Messages API provider."""

import anthropic

from gitcal.services.llm.base import BaseLanguageModelClient, RawResponse


class AnthropicLanguageModelClient(BaseLanguageModelClient):
    """Generates text with Claude via the Anthropic SDK.

    Returns the SDK Message, whose `content` is a list of typed blocks.
    """

    provider = "anthropic"
    default_model = "claude-sonnet-4-20250514"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._client: anthropic.AsyncAnthropic | None = None

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key, timeout=self.timeout)
        return self._client

    async def _complete(self, prompt: str) -> RawResponse:
        return await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
