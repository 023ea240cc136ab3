"""OpenAI Chat Completions provider."""

from openai import AsyncOpenAI

from gitcal.services.llm.base import BaseLanguageModelClient, RawResponse


class OpenAILanguageModelClient(BaseLanguageModelClient):
    """Generates text via the OpenAI SDK.

    Returns the first choice's message, whose `content` is a plain string.
    """

    provider = "openai"
    default_model = "gpt-4o"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)
        return self._client

    async def _complete(self, prompt: str) -> RawResponse:
        response = await self.client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        return response.choices[0].message
