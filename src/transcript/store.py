"""Append-only transcript store.

The store is the single source of truth for what the chat view renders.
Messages are kept in insertion order, which is both display order and
chronological order. At most one message is open at a time, and an open
message is always the last one.
"""

import logging
from collections.abc import Callable, Iterator

from src.models.schemas import HistoryEntry, Message, Role

logger = logging.getLogger(__name__)

TranscriptListener = Callable[["TranscriptStore"], None]


class InvalidStateError(Exception):
    """Raised when a mutation would break the single-open-message rule."""

    pass


class TranscriptStore:
    """Ordered list of chat messages with streaming-aware mutators.

    Listeners registered with ``subscribe`` are called synchronously after
    every mutation so the rendering layer can refresh.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._listeners: list[TranscriptListener] = []

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the transcript; mutating it does not touch the store."""
        return tuple(msg.model_copy() for msg in self._messages)

    @property
    def last(self) -> Message | None:
        if not self._messages:
            return None
        return self._messages[-1].model_copy()

    @property
    def has_open_message(self) -> bool:
        return bool(self._messages) and self._messages[-1].open

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def subscribe(self, listener: TranscriptListener) -> Callable[[], None]:
        """Register a change listener.

        Args:
            listener: Called with the store after each mutation.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _open_assistant(self) -> Message | None:
        if not self._messages:
            return None
        last = self._messages[-1]
        if last.role is Role.ASSISTANT and last.open:
            return last
        return None

    def append(self, message: Message) -> None:
        """Add a message at the end of the transcript.

        A user message closes any open assistant message first.

        Raises:
            InvalidStateError: If an assistant message is appended while the
                last message is still open.
        """
        if self.has_open_message:
            if message.role is Role.ASSISTANT:
                raise InvalidStateError(
                    "Cannot append an assistant message while the last message is open"
                )
            self._messages[-1].open = False

        # only assistant messages stream
        is_open = message.open and message.role is Role.ASSISTANT
        self._messages.append(message.model_copy(update={"open": is_open}))
        self._notify()

    def append_or_extend_assistant(self, fragment: str) -> None:
        """Concatenate onto the open assistant message, or start a new one."""
        current = self._open_assistant()
        if current is None:
            self._messages.append(Message(role=Role.ASSISTANT, content=fragment, open=True))
        else:
            current.content += fragment
        self._notify()

    def set_open_assistant(self, text: str) -> None:
        """Assign the full content of the open assistant message.

        Starts a new open assistant message when none is open.
        """
        current = self._open_assistant()
        if current is None:
            self._messages.append(Message(role=Role.ASSISTANT, content=text, open=True))
        else:
            current.content = text
        self._notify()

    def close_last(self) -> None:
        """Freeze the last message if it is an open assistant message."""
        current = self._open_assistant()
        if current is None:
            return
        current.open = False
        self._notify()

    def replace_last_assistant(self, text: str) -> None:
        """Overwrite the last assistant message with ``text``.

        Partial streamed content is discarded rather than appended to.
        When the last message is not from the assistant, a new closed
        assistant message holding ``text`` is appended instead.
        """
        if self._messages and self._messages[-1].role is Role.ASSISTANT:
            last = self._messages[-1]
            last.content = text
            last.open = False
        else:
            if self.has_open_message:
                self._messages[-1].open = False
            self._messages.append(Message(role=Role.ASSISTANT, content=text))
        self._notify()

    def history(self) -> list[HistoryEntry]:
        """Return the transcript as role/content pairs for the request body."""
        return [HistoryEntry(role=msg.role, content=msg.content) for msg in self._messages]

    def clear(self) -> None:
        """Drop every message, starting a fresh conversation.

        Raises:
            InvalidStateError: If a message is still receiving content.
        """
        if self.has_open_message:
            raise InvalidStateError("Cannot clear the transcript while a message is open")
        self._messages.clear()
        logger.debug("Transcript cleared")
        self._notify()
