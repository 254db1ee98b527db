"""
In-memory repositories.

State lives in plain dicts and lists owned by each instance, so every test
gets an isolated store. Records are copied on the way in and out to mimic a
real database: callers never share mutable state with the store.
"""

from chatbot_service.conversation_database.data_models.turn import Turn, TurnDatabase
from chatbot_service.conversation_database.data_models.user import User, UserDatabase
from chatbot_service.errors import ConflictError, NotFoundError


class InMemoryUserDatabase(UserDatabase):
    def __init__(self) -> None:
        self.users: dict[str, User] = {}

    async def create_user(self, user: User) -> User:
        if any(existing.email == user.email for existing in self.users.values()):
            raise ConflictError()
        self.users[user.id] = user.model_copy()
        return user

    async def get_user_by_id(self, user_id: str) -> User | None:
        user = self.users.get(user_id)
        return user.model_copy() if user else None

    async def get_user_by_email(self, email: str) -> User | None:
        user = next((user for user in self.users.values() if user.email == email), None)
        return user.model_copy() if user else None

    async def get_users(self) -> list[User]:
        return [user.model_copy() for user in self.users.values()]

    async def update_system_role(self, user_id: str, system_role: str) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError(detail=f"User with id {user_id} not found")
        updated = user.model_copy(update={"system_role": system_role})
        self.users[user_id] = updated
        return updated.model_copy()


class InMemoryTurnDatabase(TurnDatabase):
    def __init__(self) -> None:
        self.turns: list[Turn] = []

    async def create_turn(self, turn: Turn) -> Turn:
        self.turns.append(turn.model_copy())
        return turn

    async def get_turns_by_user_id(self, user_id: str) -> list[Turn]:
        # List order is insertion order; timestamps can tie within a millisecond.
        return [turn.model_copy() for turn in self.turns if turn.user_id == user_id]
