"""Transcript store - ordered source of truth for the chat view.

Holds user and assistant messages in display order and enforces that at
most one assistant message is open while a reply streams in.
"""

from src.transcript.store import InvalidStateError, TranscriptStore

__all__ = ["InvalidStateError", "TranscriptStore"]
