"""
Bearer token authentication.

'BearerTokenProvider' reads 'Authorization: Bearer <token>' on protected
routes and owns the two public routes that hand out tokens:

    POST /api/register  -> 201 {token, message}
    POST /api/login     -> 200 {token, message}
"""

from fastapi import APIRouter, FastAPI, Request, status
from loguru import logger

from chatbot_service.api.auth.base import AuthContext, AuthProvider
from chatbot_service.api.models import LoginInput, RegisterInput
from chatbot_service.auth.service import AuthService, TokenResponse
from chatbot_service.auth.tokens import TokenIssuer
from chatbot_service.errors import AuthError, ChatbotError, InternalServerError

BEARER_SCHEME = "Bearer"


class BearerTokenProvider(AuthProvider):
    def __init__(self, token_issuer: TokenIssuer, auth_service: AuthService) -> None:
        self.token_issuer = token_issuer
        self.auth_service = auth_service

    async def get_current_user(self, request: Request) -> AuthContext:
        header = request.headers.get("Authorization", "").strip()
        token = header[len(BEARER_SCHEME) :].strip() if header.startswith(BEARER_SCHEME) else header
        if not token:
            raise AuthError("No token provided.", status_code=401)
        return AuthContext(user_id=self.token_issuer.verify(token))

    def bind_to_app(self, app: FastAPI) -> None:
        router = APIRouter(prefix="/api", tags=["Authentication"])

        @router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
        async def register(data: RegisterInput) -> TokenResponse:
            try:
                return await self.auth_service.register(name=data.name, email=data.email, password=data.password)
            except ChatbotError:
                raise
            except Exception as exc:
                logger.exception("Error during user registration")
                raise InternalServerError("Server error.") from exc

        @router.post("/login", response_model=TokenResponse)
        async def login(data: LoginInput) -> TokenResponse:
            try:
                return await self.auth_service.login(email=data.email, password=data.password)
            except ChatbotError:
                raise
            except Exception as exc:
                logger.exception("Error during login")
                raise InternalServerError("Server error.") from exc

        app.include_router(router)
