from typing import Optional, Protocol

from openai import AsyncOpenAI, OpenAIError

from config import get_settings


class GenerationError(Exception):
    """The generator could not produce text for a prompt."""


class GenerationClient(Protocol):
    async def complete(self, prompt: str) -> str: ...


def _get_client() -> AsyncOpenAI:
    s = get_settings()
    return AsyncOpenAI(
        api_key=s.openai_api_key,
        base_url=s.openai_base_url or None,
        timeout=s.generation_timeout,
        max_retries=s.generation_max_retries,
    )


class OpenAIGenerationClient:
    """
    GenerationClient backed by an OpenAI-compatible chat completions endpoint.
    Any provider, network or empty-reply problem is raised as GenerationError.
    """

    def __init__(self, client: Optional[AsyncOpenAI] = None, model: Optional[str] = None):
        s = get_settings()
        self._client = client or _get_client()
        self.model = model or s.chat_model
        self.temperature = s.generation_temperature
        self.max_tokens = s.generation_max_tokens

    async def complete(self, prompt: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            raise GenerationError(str(e)) from e

        if not response.choices or not response.choices[0].message.content:
            raise GenerationError("Model returned an empty response")
        return response.choices[0].message.content
