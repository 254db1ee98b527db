"""
FastAPI application factory.

'create_app' receives every stateful component (controller, auth provider,
metrics, lifespan) from the caller; nothing here is a module-level
singleton. Routes:

    POST /api/register   public, owned by the auth provider
    POST /api/login      public, owned by the auth provider
    GET  /api/users      bearer token
    POST /api/chatbot    bearer token
    GET  /metrics        public, owned by 'RequestMetrics'

Errors leave the application as '{"message": ...}' bodies. 'ChatbotError'
subclasses carry their own status; request bodies FastAPI cannot parse are
answered with 400; anything unexpected inside a handler is logged with its
traceback and answered with a generic 500.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from chatbot_service import __version__
from chatbot_service.api.auth.base import AuthContext, AuthProvider
from chatbot_service.api.metrics import RequestMetrics
from chatbot_service.api.models import ChatInput, ChatResponse
from chatbot_service.conversation_database.controller import ChatbotController, PublicUser
from chatbot_service.errors import ChatbotError, InternalServerError


def build_chat_router(controller: ChatbotController, auth_provider: AuthProvider) -> APIRouter:
    router = APIRouter(prefix="/api", tags=["Chat"])

    @router.get("/users", response_model=list[PublicUser])
    async def list_users(context: AuthContext = Depends(auth_provider.get_current_user)) -> list[PublicUser]:
        try:
            return await controller.list_users()
        except ChatbotError:
            raise
        except Exception as exc:
            logger.exception("Error while listing users")
            raise InternalServerError("Error while fetching users.") from exc

    @router.post("/chatbot", response_model=ChatResponse)
    async def chatbot(data: ChatInput, context: AuthContext = Depends(auth_provider.get_current_user)) -> ChatResponse:
        try:
            reply = await controller.chat(context.user_id, data.message, data.system_role)
        except ChatbotError:
            raise
        except Exception as exc:
            logger.exception(f"Error while chatting for user {context.user_id}")
            raise InternalServerError("Error while talking to the chatbot.") from exc
        return ChatResponse(response=reply)

    return router


async def chatbot_error_handler(request: Request, exc: ChatbotError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": "Invalid request body."})


def create_app(
    controller: ChatbotController,
    auth_provider: AuthProvider,
    metrics: RequestMetrics,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[None]] | None = None,
) -> FastAPI:
    app = FastAPI(title="chatbot-service", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    metrics.bind_to_app(app)
    auth_provider.bind_to_app(app)
    app.include_router(build_chat_router(controller, auth_provider))
    app.add_exception_handler(ChatbotError, chatbot_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    return app
