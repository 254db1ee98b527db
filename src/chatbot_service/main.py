"""
Process entry point.

Loads the settings, builds every long-lived component once (MongoDB store,
OpenAI client, token issuer, metrics registry) and hands them to
'create_app'. The MongoDB connection is checked and its indexes created in
the application lifespan; if that fails, startup is aborted.

Run with:

    python -m chatbot_service
"""

import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import pydantic
import uvicorn
from fastapi import FastAPI
from loguru import logger
from pymongo.errors import PyMongoError

from chatbot_service.api.app import create_app
from chatbot_service.api.auth.bearer import BearerTokenProvider
from chatbot_service.api.metrics import RequestMetrics
from chatbot_service.auth.service import AuthService
from chatbot_service.auth.tokens import TokenIssuer
from chatbot_service.config import Settings, load_settings
from chatbot_service.conversation_database.controller import ChatbotController
from chatbot_service.conversation_database.mongodb import MongoStore
from chatbot_service.llms.openai import OpenAILLM

HOST = "0.0.0.0"


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def build_app(settings: Settings) -> FastAPI:
    store = MongoStore(settings.mongo_uri, default_database=settings.mongo_database)
    llm = OpenAILLM(model_name=settings.openai_model, openai_api_key=settings.openai_api_key.get_secret_value())
    token_issuer = TokenIssuer(settings.jwt_secret.get_secret_value())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await store.connect()
        except PyMongoError as exc:
            logger.error(f"MongoDB connection error: {exc}")
            raise
        try:
            yield
        finally:
            await store.close()

    return create_app(
        controller=ChatbotController(store.users, store.turns, llm),
        auth_provider=BearerTokenProvider(token_issuer, AuthService(store.users, token_issuer)),
        metrics=RequestMetrics(),
        lifespan=lifespan,
    )


def run() -> None:
    try:
        settings = load_settings()
    except pydantic.ValidationError as exc:
        problems = "; ".join(f"{str(error['loc'][0]).upper()}: {error['msg']}" for error in exc.errors())
        logger.error(f"Invalid or missing configuration: {problems}")
        sys.exit(1)

    configure_logging(settings.log_level)
    app = build_app(settings)
    logger.info(f"Server listening on http://{HOST}:{settings.port}")
    uvicorn.run(app, host=HOST, port=settings.port, log_level=settings.log_level.lower())
