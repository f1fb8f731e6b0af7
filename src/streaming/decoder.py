"""Line decoder for incrementally delivered response bodies.

Transport frames are not aligned to event boundaries: one event line may
span several frames, a frame may hold several lines, and a multi-byte
UTF-8 character may be cut in half. The decoder carries both the undecoded
trailing bytes and the unterminated trailing text across calls.
"""

import codecs
import logging

logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\n"


class StreamDecoder:
    """Turns raw frames into complete lines, preserving arrival order.

    Create one decoder per turn; all carry-over state lives on the instance.

    Args:
        encoding: Text encoding of the body.
        errors: Codec error mode. ``"strict"`` raises ``UnicodeDecodeError``
            on invalid input.
    """

    def __init__(self, encoding: str = "utf-8", errors: str = "strict") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors=errors)
        self._buffer = ""
        self._finished = False

    @property
    def pending(self) -> str:
        """Unterminated text waiting for the rest of its line."""
        return self._buffer

    def feed(self, frame: bytes | str) -> list[str]:
        """Decode a frame and return every line it completes.

        Args:
            frame: Raw bytes from the transport, or already-decoded text.

        Returns:
            Fully terminated lines, without their terminators, in order.

        Raises:
            RuntimeError: If called after ``finish``.
            ValueError: If a text frame arrives while undecoded bytes are pending.
            UnicodeDecodeError: If the frame is not valid in strict mode.
        """
        if self._finished:
            raise RuntimeError("Decoder already finished")

        if isinstance(frame, str):
            if self._decoder.getstate()[0]:
                raise ValueError("Text frame received while a split character is pending")
            text = frame
        else:
            text = self._decoder.decode(frame)

        if not text:
            return []

        self._buffer += text
        *complete, self._buffer = self._buffer.split(LINE_TERMINATOR)
        return [_strip_carriage_return(line) for line in complete]

    def finish(self) -> str | None:
        """Flush the decoder at end of stream.

        Returns:
            The dangling unterminated line, or None if nothing is buffered.

        Raises:
            UnicodeDecodeError: If the body ended mid-character in strict mode.
        """
        if self._finished:
            return None
        self._finished = True

        tail = self._decoder.decode(b"", final=True)
        remainder = _strip_carriage_return(self._buffer + tail)
        self._buffer = ""

        if not remainder:
            return None

        logger.debug(f"Flushing unterminated final line ({len(remainder)} chars)")
        return remainder


def _strip_carriage_return(line: str) -> str:
    if line.endswith("\r"):
        return line[:-1]
    return line
