"""Event reducer: applies decoded stream lines to the transcript."""

import logging
from collections.abc import Iterable
from enum import Enum

from src.transcript.store import TranscriptStore

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "


class ReducerStrategy(str, Enum):
    """How payload fragments reach the transcript.

    DELTA extends the open message with each fragment. ACCUMULATE keeps the
    full text of the turn and assigns it on every fragment. Both produce the
    same transcript.
    """

    DELTA = "delta"
    ACCUMULATE = "accumulate"


class EventReducer:
    """Classifies lines and drives the transcript for one turn.

    Only lines starting with ``"data: "`` carry payload; everything else is
    ignored so unknown event types never break a turn. Each fragment is
    applied exactly once, in the order it was decoded.

    Args:
        store: Transcript receiving the assistant reply.
        strategy: Fragment application strategy.
    """

    def __init__(
        self,
        store: TranscriptStore,
        strategy: ReducerStrategy = ReducerStrategy.DELTA,
    ) -> None:
        self._store = store
        self._strategy = strategy
        self._accumulated = ""
        self._fragment_count = 0

    @property
    def accumulated(self) -> str:
        """Concatenation of every fragment applied this turn."""
        return self._accumulated

    @property
    def fragment_count(self) -> int:
        return self._fragment_count

    def apply(self, line: str) -> bool:
        """Apply one decoded line.

        Returns:
            True if the line was a data line and reached the transcript.
        """
        if not line.startswith(DATA_PREFIX):
            if line:
                logger.debug(f"Ignoring non-data line: {line[:40]!r}")
            return False

        fragment = line[len(DATA_PREFIX):]
        self._accumulated += fragment
        self._fragment_count += 1

        if self._strategy is ReducerStrategy.ACCUMULATE:
            self._store.set_open_assistant(self._accumulated)
        else:
            self._store.append_or_extend_assistant(fragment)
        return True

    def apply_all(self, lines: Iterable[str]) -> int:
        """Apply lines in order and return how many were data lines."""
        return sum(1 for line in lines if self.apply(line))

    def complete(self) -> None:
        """Close the assistant message at the end of the stream."""
        self._store.close_last()
