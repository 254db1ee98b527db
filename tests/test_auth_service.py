import pytest

from chatbot_service.auth.service import INVALID_CREDENTIALS, AuthService
from chatbot_service.auth.tokens import TokenIssuer
from chatbot_service.conversation_database.in_memory import InMemoryUserDatabase
from chatbot_service.errors import AuthError, ConflictError, ValidationError


async def test_register_creates_user_with_hashed_password(
    auth_service: AuthService, user_db: InMemoryUserDatabase, token_issuer: TokenIssuer
) -> None:
    result = await auth_service.register("Alice", "alice@example.com", "s3cret")

    user = await user_db.get_user_by_email("alice@example.com")
    assert user is not None
    assert user.name == "Alice"
    assert user.password != "s3cret"
    assert user.system_role is None
    assert token_issuer.verify(result.token) == user.id


@pytest.mark.parametrize(
    "name, email, password",
    [(None, "a@example.com", "pw"), ("A", "", "pw"), ("A", "a@example.com", None)],
)
async def test_register_requires_every_field(
    auth_service: AuthService, user_db: InMemoryUserDatabase, name: str | None, email: str | None, password: str | None
) -> None:
    with pytest.raises(ValidationError):
        await auth_service.register(name, email, password)
    assert await user_db.get_users() == []


async def test_register_twice_with_same_email(auth_service: AuthService, user_db: InMemoryUserDatabase) -> None:
    await auth_service.register("Alice", "alice@example.com", "s3cret")

    with pytest.raises(ConflictError) as exc_info:
        await auth_service.register("Alice again", "alice@example.com", "other")

    assert exc_info.value.status_code == 400
    assert len(await user_db.get_users()) == 1


async def test_login_returns_token_for_the_user(
    auth_service: AuthService, user_db: InMemoryUserDatabase, token_issuer: TokenIssuer
) -> None:
    await auth_service.register("Alice", "alice@example.com", "s3cret")

    result = await auth_service.login("alice@example.com", "s3cret")

    user = await user_db.get_user_by_email("alice@example.com")
    assert user is not None
    assert token_issuer.verify(result.token) == user.id


async def test_login_failures_are_indistinguishable(auth_service: AuthService) -> None:
    await auth_service.register("Alice", "alice@example.com", "s3cret")

    with pytest.raises(AuthError) as wrong_password:
        await auth_service.login("alice@example.com", "wrong")
    with pytest.raises(AuthError) as unknown_email:
        await auth_service.login("bob@example.com", "s3cret")

    assert wrong_password.value.status_code == unknown_email.value.status_code == 400
    assert wrong_password.value.message == unknown_email.value.message == INVALID_CREDENTIALS


async def test_login_requires_email_and_password(auth_service: AuthService) -> None:
    with pytest.raises(ValidationError):
        await auth_service.login("alice@example.com", "")
