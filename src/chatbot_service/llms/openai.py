"""
OpenAI chat completions backend.

Sampling parameters are fixed at construction time. The client is created
with 'max_retries=0' so a failed or timed out request fails the chat request
immediately; the timeout is the client library's default.
"""

from loguru import logger
from openai import AsyncOpenAI, OpenAIError

from chatbot_service.errors import ExternalServiceError
from chatbot_service.llms.base import LLM, LLMMessage, Roles

DEFAULT_MODEL = "gpt-4"
DEFAULT_TEMPERATURE = 1.0
DEFAULT_MAX_TOKENS = 256


class OpenAILLM(LLM):
    def __init__(
        self,
        model_name: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        openai_api_key: str | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self.model_name = model_name
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = client or AsyncOpenAI(api_key=openai_api_key, max_retries=0)

    async def generate(self, conversation: list[LLMMessage]) -> LLMMessage:
        try:
            response = await self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": message.role.value, "content": message.content} for message in conversation],  # type: ignore[misc]
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as exc:
            logger.error(f"OpenAI request failed ({self.model_name}): {exc!r}")
            raise ExternalServiceError() from exc

        if not response.choices:
            logger.error(f"OpenAI returned no choices ({self.model_name})")
            raise ExternalServiceError()
        return LLMMessage(role=Roles.ASSISTANT, content=response.choices[0].message.content or "")
