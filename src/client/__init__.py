"""Chat client - turn orchestration against the remote assistant endpoint.

Responsibilities:
    - Building the outbound request (prefix, message, prior history)
    - Streaming the response body through the decoder and reducer
    - Turn state machine and the single-turn-in-flight loading guard
    - Collapsing failed turns into one fixed error message

Configuration is loaded from the environment via ClientConfig.
"""

from src.client.config import ClientConfig, get_client_config
from src.client.errors import ChatClientError, PreflightError, TransportError
from src.client.orchestrator import ChatOrchestrator, Turn

__all__ = [
    "ChatClientError",
    "ChatOrchestrator",
    "ClientConfig",
    "PreflightError",
    "TransportError",
    "Turn",
    "get_client_config",
]
