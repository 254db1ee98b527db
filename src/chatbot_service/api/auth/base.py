"""
Authentication provider abstraction.

An 'AuthProvider' integrates with a FastAPI application to identify the
current user on every request. The identity is handed to route handlers as an
explicit 'AuthContext' dependency value rather than stored on the request.

The service ships one implementation, 'BearerTokenProvider'.
"""

from abc import ABC, abstractmethod

from fastapi import FastAPI, Request
from pydantic import BaseModel


class AuthContext(BaseModel):
    """Identity of the caller of a protected route."""

    user_id: str


class AuthProvider(ABC):
    """
    Abstract base class for authentication backends.

    Implementors must supply a FastAPI dependency that resolves to the
    caller's 'AuthContext' ('get_current_user') and a setup hook that
    registers the routes the provider owns ('bind_to_app').
    """

    @abstractmethod
    async def get_current_user(self, request: Request) -> AuthContext:
        """FastAPI dependency that returns the authenticated caller.

        Raise 'AuthError' with status 401 when no credentials are present and
        403 when they are invalid.
        """
        pass

    @abstractmethod
    def bind_to_app(self, app: FastAPI) -> None:
        """Register routes required by this provider."""
        pass
