"""Chat client configuration with environment variable loading.

Pydantic-based configuration for the streaming chat client.
"""

import os

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.streaming.reducer import ReducerStrategy

# Load environment variables from .env file
load_dotenv()

DEFAULT_ERROR_MESSAGE = "Sorry, there was an error. Please try again."


class ClientConfig(BaseModel):
    """Configuration for the chat client.

    Attributes:
        api_url: Chat endpoint receiving the POST request.
        system_prefix: Instruction string sent with every request.
        error_message: Text shown in place of a failed reply.
        timeout: Request timeout in seconds (None waits indefinitely).
        strategy: How streamed fragments are applied to the transcript.
    """

    # env-derived defaults go through the same validators as explicit values
    model_config = ConfigDict(validate_default=True)

    api_url: str = Field(
        default_factory=lambda: os.getenv("CHAT_API_URL") or "http://localhost:8080/chat",
        description="Chat endpoint URL",
    )
    system_prefix: str = Field(
        default_factory=lambda: os.getenv("CHAT_SYSTEM_PREFIX") or "You are an AI assistant.",
        description="System instruction sent as the request prefix",
    )
    error_message: str = Field(
        default_factory=lambda: os.getenv("CHAT_ERROR_MESSAGE") or DEFAULT_ERROR_MESSAGE,
        description="Fallback assistant message when a turn fails",
    )
    timeout: float | None = Field(
        default_factory=lambda: os.getenv("CHAT_TIMEOUT") or None,
        description="Request timeout in seconds; unset means no timeout",
    )
    strategy: ReducerStrategy = Field(
        default_factory=lambda: os.getenv("CHAT_REDUCER_STRATEGY") or ReducerStrategy.DELTA.value,
        description="Fragment application strategy (delta or accumulate)",
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("CHAT_API_URL must be an http:// or https:// URL")
        try:
            httpx.URL(v)
        except httpx.InvalidURL as e:
            raise ValueError(f"CHAT_API_URL is not a valid URL: {e}") from e
        return v

    @field_validator("error_message")
    @classmethod
    def validate_error_message(cls, v: str) -> str:
        """Validate that the fallback message is non-empty."""
        if not v or not v.strip():
            raise ValueError("CHAT_ERROR_MESSAGE must not be empty")
        return v.strip()

    @field_validator("timeout", mode="before")
    @classmethod
    def blank_timeout_is_none(cls, v: object) -> object:
        """Treat a blank environment value as no timeout."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        """Reject zero or negative timeouts."""
        if v is not None and v <= 0:
            raise ValueError("CHAT_TIMEOUT must be a positive number of seconds")
        return v


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If an environment value is invalid.
    """
    return ClientConfig()
