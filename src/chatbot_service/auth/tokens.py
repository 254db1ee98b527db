"""
Bearer token issuing and verification.

Tokens are HS256 JWTs signed with the shared secret. The payload carries the
user id under 'id' together with 'iat' and 'exp'; there is no refresh token,
clients log in again once a token has expired.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from chatbot_service.errors import AuthError

ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(hours=1)


class TokenIssuer:
    def __init__(self, secret: str, lifetime: timedelta = TOKEN_LIFETIME) -> None:
        self.secret = secret
        self.lifetime = lifetime

    def issue(self, user_id: str, now: datetime | None = None) -> str:
        """Return a signed token for 'user_id' that expires 'lifetime' after 'now'."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {"id": user_id, "iat": issued_at, "exp": issued_at + self.lifetime}
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> str:
        """Return the user id embedded in 'token'.

        Raises:
            AuthError: (403) the token is malformed, tampered with, expired or
                carries no user id.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except JWTError as exc:
            raise AuthError(status_code=403, detail=f"Token rejected: {exc}") from exc

        user_id = payload.get("id")
        if not isinstance(user_id, str) or not user_id:
            raise AuthError(status_code=403, detail="Token has no user id")
        return user_id
