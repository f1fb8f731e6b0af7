"""Request orchestrator - owns the lifecycle of one chat turn.

A turn moves through ``idle -> sending -> streaming -> completed | failed``.
The user message is appended before the network call starts, every frame of
the response body is decoded into lines and reduced into the transcript,
and whatever happens the loading flag is cleared exactly once at the end.

Failures never surface raw error detail to the user: the last assistant
message is collapsed into a single fixed error string and the cause is
only logged.
"""

import asyncio
import logging
from collections.abc import Callable

import httpx

from src.client.config import ClientConfig, get_client_config
from src.client.errors import ChatClientError, PreflightError, TransportError
from src.models.schemas import ChatRequest, Message, Role, TurnState
from src.streaming.decoder import StreamDecoder
from src.streaming.reducer import EventReducer
from src.transcript.store import TranscriptStore

logger = logging.getLogger(__name__)

LoadingListener = Callable[[bool], None]
ErrorListener = Callable[[ChatClientError], None]


class Turn:
    """One request/response cycle.

    Attributes:
        text: The submitted user message.
        state: Current lifecycle state.
        error: The failure that ended the turn, if any.
        fragments: Number of payload fragments applied to the transcript.
        reply: Final assistant text for a completed turn.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.state = TurnState.IDLE
        self.error: ChatClientError | None = None
        self.fragments = 0
        self.reply: str | None = None

    def __repr__(self) -> str:
        return f"Turn(state={self.state.value!r}, fragments={self.fragments})"


class ChatOrchestrator:
    """Drives chat turns against the remote endpoint.

    Only one turn is in flight at a time; submissions made while loading
    are rejected.

    Args:
        config: Client configuration. Loads from environment if not provided.
        store: Transcript to update. A fresh one is created if not provided.
        client: HTTP client to use. When omitted the orchestrator creates
            and owns one; an injected client is left open on ``aclose``.
        on_loading: Called with True when a turn starts and False when it ends.
        on_error: Called with the failure when a turn fails.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        store: TranscriptStore | None = None,
        client: httpx.AsyncClient | None = None,
        on_loading: LoadingListener | None = None,
        on_error: ErrorListener | None = None,
    ) -> None:
        self._config = config or get_client_config()
        self._store = store if store is not None else TranscriptStore()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()
        self._on_loading = on_loading
        self._on_error = on_error
        self._loading = False
        self._current: Turn | None = None

    @property
    def store(self) -> TranscriptStore:
        return self._store

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def loading(self) -> bool:
        """True between submit and the end of the turn."""
        return self._loading

    @property
    def state(self) -> TurnState:
        if self._current is None:
            return TurnState.IDLE
        return self._current.state

    def _set_loading(self, value: bool) -> None:
        self._loading = value
        if self._on_loading is not None:
            self._on_loading(value)

    async def submit(self, text: str) -> Turn | None:
        """Send a user message and stream the reply into the transcript.

        Args:
            text: Raw input text; surrounding whitespace is stripped.

        Returns:
            The finished turn, or None if the input was blank or another
            turn is still in flight.
        """
        text = text.strip()
        if not text:
            return None
        if self._loading:
            logger.debug("Rejecting submission while a turn is in flight")
            return None

        request = ChatRequest(
            prefix=self._config.system_prefix,
            message=text,
            history=self._store.history(),
        )
        turn = Turn(text)
        self._current = turn
        self._set_loading(True)
        logger.info(f"Starting chat turn ({len(request.history)} history messages)")

        try:
            self._store.append(Message(role=Role.USER, content=text))
            await self._run(turn, request)
        except ChatClientError as e:
            turn.state = TurnState.FAILED
            turn.error = e
            logger.warning(f"Chat turn failed after {turn.fragments} fragments: {e}")
            self._store.replace_last_assistant(self._config.error_message)
            if self._on_error is not None:
                self._on_error(e)
        except asyncio.CancelledError:
            turn.state = TurnState.FAILED
            self._store.close_last()
            logger.info("Chat turn cancelled")
            raise
        finally:
            self._current = None
            self._set_loading(False)

        return turn

    async def _run(self, turn: Turn, request: ChatRequest) -> None:
        decoder = StreamDecoder()
        reducer = EventReducer(self._store, self._config.strategy)
        turn.state = TurnState.SENDING

        try:
            async with self._client.stream(
                "POST",
                self._config.api_url,
                json=request.model_dump(mode="json"),
                headers={"Accept": "text/event-stream"},
                timeout=httpx.Timeout(self._config.timeout),
            ) as response:
                _check_preflight(response)
                turn.state = TurnState.STREAMING

                async for frame in response.aiter_bytes():
                    reducer.apply_all(decoder.feed(frame))

                final_line = decoder.finish()
                if final_line is not None:
                    reducer.apply(final_line)
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e
        except UnicodeDecodeError as e:
            raise TransportError(f"Undecodable response body: {e}") from e
        finally:
            turn.fragments = reducer.fragment_count

        reducer.complete()
        turn.state = TurnState.COMPLETED
        turn.reply = reducer.accumulated if reducer.fragment_count else None
        logger.info(f"Chat turn completed ({turn.fragments} fragments)")

    async def aclose(self) -> None:
        """Close the HTTP client if this orchestrator created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ChatOrchestrator":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _check_preflight(response: httpx.Response) -> None:
    """Reject responses that cannot carry a stream.

    Raises:
        PreflightError: On a non-success status or an empty body.
    """
    if not response.is_success:
        raise PreflightError(f"HTTP {response.status_code}", response.status_code)

    if response.status_code == 204 or response.headers.get("content-length") == "0":
        raise PreflightError("Response body is empty", response.status_code)
