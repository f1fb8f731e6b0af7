"""Failure taxonomy for chat turns.

Lines that do not match the data prefix are protocol noise and never
raise; they are dropped by the reducer.
"""


class ChatClientError(Exception):
    """Base class for failures that end a turn."""

    pass


class PreflightError(ChatClientError):
    """The server refused the turn before any content streamed.

    Raised for a non-success status or a response without a body.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(ChatClientError):
    """The connection failed, or the body could not be read or decoded."""

    pass
