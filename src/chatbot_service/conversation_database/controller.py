"""
Chat controller (Facade).

'ChatbotController' is the single entry point for chat logic. It coordinates
the user and turn repositories with an 'LLM' to handle one chat interaction:
load the user, optionally store a new system role, replay the stored
conversation to the model together with the new message and persist both the
user turn and the reply.

The whole history is sent on every call; nothing is truncated or summarised.
The two turn writes are separate: a failure between them leaves a user turn
without a reply.
"""

from pydantic import BaseModel, ConfigDict, Field

from chatbot_service.conversation_database.data_models.turn import Turn, TurnDatabase
from chatbot_service.conversation_database.data_models.user import User, UserDatabase
from chatbot_service.errors import NotFoundError, ValidationError
from chatbot_service.llms.base import LLM, LLMMessage, Roles
from chatbot_service.utils.database import generate_uid
from chatbot_service.utils.time import get_current_timestamp

DEFAULT_SYSTEM_ROLE = "You are a helpful assistant."


class PublicUser(BaseModel):
    """A 'User' as exposed by the API, without the password hash."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    system_role: str | None = Field(default=None, alias="systemRole")

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(id=user.id, name=user.name, email=user.email, system_role=user.system_role)


class ChatbotController:
    def __init__(self, user_db: UserDatabase, turn_db: TurnDatabase, llm: LLM):
        self.user_db = user_db
        self.turn_db = turn_db
        self.llm = llm

    async def list_users(self) -> list[PublicUser]:
        return [PublicUser.from_user(user) for user in await self.user_db.get_users()]

    async def get_history(self, user_id: str) -> list[LLMMessage]:
        turns = await self.turn_db.get_turns_by_user_id(user_id)
        return [LLMMessage(role=turn.role, content=turn.content) for turn in turns]

    async def chat(self, user_id: str, message: str | None, system_role: str | None = None) -> str:
        """Send 'message' to the model with the user's full history and return the reply.

        A non-empty 'system_role' is stored on the user before the call and
        therefore applies to every later request as well.

        Raises:
            ValidationError: 'message' is missing or empty.
            NotFoundError: the user no longer exists.
            ExternalServiceError: the model call failed; nothing is stored.
        """
        if not message:
            raise ValidationError("Please enter a message.")

        user = await self.user_db.get_user_by_id(user_id)
        if user is None:
            raise NotFoundError(detail=f"User with id {user_id} not found")

        if system_role:
            user = await self.user_db.update_system_role(user_id, system_role)

        history = await self.get_history(user_id)
        answer = await self.llm.generate(
            [
                LLMMessage(role=Roles.SYSTEM, content=user.system_role or DEFAULT_SYSTEM_ROLE),
                *history,
                LLMMessage(role=Roles.USER, content=message),
            ]
        )

        await self.turn_db.create_turn(
            Turn(
                id=generate_uid(),
                user_id=user_id,
                role=Roles.USER,
                content=message,
                create_timestamp=get_current_timestamp(),
            )
        )
        await self.turn_db.create_turn(
            Turn(
                id=generate_uid(),
                user_id=user_id,
                role=Roles.ASSISTANT,
                content=answer.content,
                create_timestamp=get_current_timestamp(),
            )
        )
        return answer.content
