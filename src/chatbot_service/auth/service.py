"""
Registration and login.

Login failures are deliberately indistinguishable: an unknown email and a
wrong password produce the same 400 response so the endpoint cannot be used
to discover registered addresses.
"""

from loguru import logger
from pydantic import BaseModel

from chatbot_service.auth.passwords import hash_password, verify_password
from chatbot_service.auth.tokens import TokenIssuer
from chatbot_service.conversation_database.data_models.user import User, UserDatabase
from chatbot_service.errors import AuthError, ConflictError, ValidationError
from chatbot_service.utils.database import generate_uid

INVALID_CREDENTIALS = "Invalid email or password."


class TokenResponse(BaseModel):
    token: str
    message: str


class AuthService:
    def __init__(self, user_db: UserDatabase, token_issuer: TokenIssuer) -> None:
        self.user_db = user_db
        self.token_issuer = token_issuer

    async def register(self, name: str | None, email: str | None, password: str | None) -> TokenResponse:
        if not name or not email or not password:
            raise ValidationError("Please fill in all fields.")

        if await self.user_db.get_user_by_email(email):
            raise ConflictError()

        # The store enforces uniqueness again in case of a concurrent registration.
        user = await self.user_db.create_user(
            User(id=generate_uid(), name=name, email=email, password=await hash_password(password))
        )
        logger.info(f"Registered user {user.id}")
        return TokenResponse(token=self.token_issuer.issue(user.id), message="User registered successfully.")

    async def login(self, email: str | None, password: str | None) -> TokenResponse:
        if not email or not password:
            raise ValidationError("Please enter your email and password.")

        user = await self.user_db.get_user_by_email(email)
        if user is None or not await verify_password(password, user.password):
            raise AuthError(INVALID_CREDENTIALS, status_code=400)

        return TokenResponse(token=self.token_issuer.issue(user.id), message="Login successful.")
