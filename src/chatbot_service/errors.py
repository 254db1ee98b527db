"""
Error taxonomy shared by the services and the HTTP layer.

Every error raised on purpose derives from 'ChatbotError' and carries the
HTTP status and the short, user-facing message the API returns. The FastAPI
exception handler in 'chatbot_service.api.app' is the only place that turns
them into responses; anything else that escapes a handler is logged and
reported as 'InternalServerError'.
"""


class ChatbotError(Exception):
    """
    Base class for errors that map to an HTTP response.

    'message' is returned to the client. 'detail' is for the server log only
    and defaults to the message.
    """

    status_code: int = 500
    default_message: str = "Server error."

    def __init__(self, message: str | None = None, status_code: int | None = None, detail: str | None = None) -> None:
        self.message = message or self.default_message
        self.detail = detail or self.message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.detail)


class ValidationError(ChatbotError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Please fill in all fields."


class ConflictError(ChatbotError):
    """A user with the same email already exists."""

    status_code = 400
    default_message = "User already exists."


class AuthError(ChatbotError):
    """
    Authentication failure.

    The status depends on where it is raised: 401 for a missing token, 403 for
    an invalid or expired one and 400 for bad login credentials.
    """

    status_code = 403
    default_message = "Invalid token."


class NotFoundError(ChatbotError):
    # Not surfaced distinctly to clients.
    status_code = 500
    default_message = "Server error."


class ExternalServiceError(ChatbotError):
    """The completion API call failed or timed out."""

    status_code = 500
    default_message = "Error while talking to the chatbot."


class InternalServerError(ChatbotError):
    status_code = 500
