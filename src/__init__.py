"""Streaming Chat Client - browser chat UI for a remote assistant endpoint.

Sends user messages over HTTP, consumes the line-delimited event stream,
and assembles the reply into an ordered transcript while it arrives.

Components:
    - models: Message, request and turn-state schemas
    - transcript: Append-only transcript store
    - streaming: Frame-to-line decoder and event reducer
    - client: Turn orchestration, configuration and error taxonomy
    - ui: NiceGUI chat page
    - api: FastAPI host application
"""

__version__ = "0.1.0"
