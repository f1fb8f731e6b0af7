"""Pydantic models shared by the transcript, streaming and client layers.

Models:
    - Role: Message speaker (user or assistant)
    - Message: Transcript entry with an open/closed flag
    - HistoryEntry: Role + content pair sent as context
    - ChatRequest: Outbound payload for the chat endpoint
    - TurnState: Lifecycle state of one request/response cycle
"""

from src.models.schemas import ChatRequest, HistoryEntry, Message, Role, TurnState

__all__ = ["ChatRequest", "HistoryEntry", "Message", "Role", "TurnState"]
