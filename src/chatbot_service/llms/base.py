"""
Core LLM abstractions and message data models.

The chat controller talks to the completion API only through the 'LLM' ABC
and the backend-agnostic 'LLMMessage' format, so tests can swap in a fake
model and the OpenAI client stays confined to 'OpenAILLM'.
"""

from abc import ABC, abstractmethod
from enum import StrEnum

from pydantic import BaseModel


class Roles(StrEnum):
    """Conversation roles as used by the OpenAI chat completions API."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class LLMMessage(BaseModel):
    """A single message in a conversation sent to or received from an LLM."""

    content: str = ""
    role: Roles = Roles.ASSISTANT


class LLM(ABC):
    """
    Abstract base class for language model backends.

    Implementations raise 'ExternalServiceError' when the backend cannot
    produce an answer; they never retry.
    """

    @abstractmethod
    async def generate(self, conversation: list[LLMMessage]) -> LLMMessage:
        """Return a single complete response for the given conversation."""
        pass
