import pytest
from fastapi.testclient import TestClient

from chatbot_service.api.app import create_app
from chatbot_service.api.auth.bearer import BearerTokenProvider
from chatbot_service.api.metrics import RequestMetrics
from chatbot_service.auth.service import AuthService
from chatbot_service.auth.tokens import TokenIssuer
from chatbot_service.conversation_database.controller import ChatbotController
from chatbot_service.conversation_database.in_memory import InMemoryTurnDatabase, InMemoryUserDatabase
from chatbot_service.llms.base import LLM, LLMMessage, Roles

SECRET = "test-secret"


class FakeLLM(LLM):
    """Records every conversation it receives and answers 'reply <n>'."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[list[LLMMessage]] = []
        self.error = error

    async def generate(self, conversation: list[LLMMessage]) -> LLMMessage:
        self.calls.append(list(conversation))
        if self.error is not None:
            raise self.error
        return LLMMessage(role=Roles.ASSISTANT, content=f"reply {len(self.calls)}")


@pytest.fixture
def user_db() -> InMemoryUserDatabase:
    return InMemoryUserDatabase()


@pytest.fixture
def turn_db() -> InMemoryTurnDatabase:
    return InMemoryTurnDatabase()


@pytest.fixture
def llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(SECRET)


@pytest.fixture
def auth_service(user_db: InMemoryUserDatabase, token_issuer: TokenIssuer) -> AuthService:
    return AuthService(user_db, token_issuer)


@pytest.fixture
def controller(user_db: InMemoryUserDatabase, turn_db: InMemoryTurnDatabase, llm: FakeLLM) -> ChatbotController:
    return ChatbotController(user_db, turn_db, llm)


@pytest.fixture
def metrics() -> RequestMetrics:
    return RequestMetrics()


@pytest.fixture
def client(
    controller: ChatbotController, auth_service: AuthService, token_issuer: TokenIssuer, metrics: RequestMetrics
) -> TestClient:
    app = create_app(controller, BearerTokenProvider(token_issuer, auth_service), metrics)
    return TestClient(app)


def register(client: TestClient, email: str = "alice@example.com", password: str = "s3cret") -> str:
    response = client.post("/api/register", json={"name": "Alice", "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
