"""
Conversation turn data model and storage interface.

A turn is one immutable message, either from the user or from the assistant.
Every chat interaction appends a user turn followed by an assistant turn;
replaying a user's turns in insertion order reconstructs the whole
conversation.

Concrete implementations: 'InMemoryTurnDatabase', 'MongoTurnDatabase'.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from chatbot_service.llms.base import Roles


class Turn(BaseModel):
    """A single stored message owned by 'user_id'; 'role' is USER or ASSISTANT."""

    id: str
    user_id: str
    role: Roles
    content: str
    create_timestamp: int


class TurnDatabase(ABC):
    """Abstract repository for 'Turn' records."""

    @abstractmethod
    async def create_turn(self, turn: Turn) -> Turn:
        pass

    @abstractmethod
    async def get_turns_by_user_id(self, user_id: str) -> list[Turn]:
        """Return every turn of the user, oldest first."""
        pass
