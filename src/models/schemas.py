from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Role(str, Enum):
    """Speaker of a transcript message."""

    USER = "user"
    ASSISTANT = "assistant"


class TurnState(str, Enum):
    """Lifecycle states of a single chat turn."""

    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"


class Message(BaseModel):
    """A single message in the conversation transcript.

    Attributes:
        role: The speaker (user or assistant).
        content: The message text.
        open: Whether the message is still receiving streamed content.
            Only the last assistant message of a transcript can be open.
    """

    role: Role
    content: str = ""
    open: bool = False


class HistoryEntry(BaseModel):
    """A prior message sent to the server as conversation context.

    Attributes:
        role: The speaker identifier.
        content: The message text.
    """

    role: Role
    content: str


class ChatRequest(BaseModel):
    """Request payload for the remote chat endpoint.

    Attributes:
        prefix: System instruction prepended by the server.
        message: The user's new message.
        history: Prior transcript, oldest first.
    """

    prefix: str
    message: str = Field(..., min_length=1)
    history: list[HistoryEntry] = Field(default_factory=list)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v
