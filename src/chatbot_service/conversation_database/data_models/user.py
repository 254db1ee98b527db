"""
User data model and storage interface.

Users are created by registration and only ever mutated to store a new
'system_role'. Email addresses are unique: 'create_user' raises
'ConflictError' when the email is taken, whatever the backend.

Concrete implementations: 'InMemoryUserDatabase', 'MongoUserDatabase'.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class User(BaseModel):
    """
    A registered user.

    'password' always holds the bcrypt hash, never the plain text.
    'system_role' is the persona prefixed to every completion request; None
    means the default assistant persona.
    """

    id: str
    name: str
    email: str
    password: str
    system_role: str | None = None


class UserDatabase(ABC):
    """Abstract repository for 'User' records."""

    @abstractmethod
    async def create_user(self, user: User) -> User:
        pass

    @abstractmethod
    async def get_user_by_id(self, user_id: str) -> User | None:
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None:
        pass

    @abstractmethod
    async def get_users(self) -> list[User]:
        pass

    @abstractmethod
    async def update_system_role(self, user_id: str, system_role: str) -> User:
        """Persist a new system role, raising 'NotFoundError' for an unknown user."""
        pass
