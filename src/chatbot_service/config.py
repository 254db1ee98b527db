"""
Application settings.

Values come from environment variables or a '.env' file in the working
directory. 'MONGO_URI', 'JWT_SECRET' and 'OPENAI_API_KEY' are required;
'load_settings' is called once by the entry point and the resulting object
is passed to whatever needs it.
"""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly typed access to the service configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongo_uri: str
    """MongoDB connection string."""

    jwt_secret: SecretStr
    """Shared secret used to sign and verify bearer tokens."""

    openai_api_key: SecretStr
    """API key for the OpenAI chat completions API."""

    port: int = 8080
    """Port the HTTP server listens on (all interfaces)."""

    mongo_database: str = "chatbot"
    """Database name used when 'mongo_uri' does not name one."""

    openai_model: str = "gpt-4"
    """Chat model identifier sent with every completion request."""

    log_level: str = "INFO"
    """Minimum level of the loguru stderr sink."""


def load_settings() -> Settings:
    # Raises pydantic.ValidationError listing every missing variable.
    return Settings()  # type: ignore[call-arg]
