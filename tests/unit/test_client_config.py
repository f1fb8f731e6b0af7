"""Unit tests for ClientConfig and request schemas.

Tests configuration validation and environment loading.
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.client.config import DEFAULT_ERROR_MESSAGE, ClientConfig, get_client_config
from src.models.schemas import ChatRequest, HistoryEntry, Role
from src.streaming.reducer import ReducerStrategy


class TestClientConfig:
    """Tests for ClientConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts valid values for all fields."""
        config = ClientConfig(
            api_url="https://chat.example.com/chat",
            system_prefix="Be brief.",
            error_message="Oops.",
            timeout=30,
            strategy="accumulate",
        )

        assert config.api_url == "https://chat.example.com/chat"
        assert config.system_prefix == "Be brief."
        assert config.error_message == "Oops."
        assert config.timeout == 30.0
        assert config.strategy is ReducerStrategy.ACCUMULATE

    def test_config_defaults_from_empty_environment(self) -> None:
        """Unset variables fall back to defaults."""
        with patch.dict("os.environ", {}, clear=True):
            config = ClientConfig()

        assert config.api_url == "http://localhost:8080/chat"
        assert config.system_prefix == "You are an AI assistant."
        assert config.error_message == DEFAULT_ERROR_MESSAGE
        assert config.timeout is None
        assert config.strategy is ReducerStrategy.DELTA

    def test_config_reads_environment(self) -> None:
        env = {
            "CHAT_API_URL": "http://backend:9000/chat",
            "CHAT_SYSTEM_PREFIX": "Custom prefix",
            "CHAT_ERROR_MESSAGE": "Try later.",
            "CHAT_TIMEOUT": "12.5",
            "CHAT_REDUCER_STRATEGY": "accumulate",
        }
        with patch.dict("os.environ", env, clear=True):
            config = get_client_config()

        assert config.api_url == "http://backend:9000/chat"
        assert config.system_prefix == "Custom prefix"
        assert config.error_message == "Try later."
        assert config.timeout == 12.5
        assert config.strategy is ReducerStrategy.ACCUMULATE

    def test_blank_timeout_means_no_timeout(self) -> None:
        with patch.dict("os.environ", {"CHAT_TIMEOUT": "  "}, clear=True):
            config = ClientConfig()

        assert config.timeout is None

    def test_config_fails_with_relative_url(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(api_url="/chat")

        assert "CHAT_API_URL" in str(exc_info.value)

    def test_config_fails_with_unparseable_port(self) -> None:
        """A URL httpx cannot parse is rejected at startup, not per turn."""
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(api_url="http://chat.test:abc/chat")

        assert "CHAT_API_URL" in str(exc_info.value)

    def test_config_strips_url_whitespace(self) -> None:
        config = ClientConfig(api_url="  http://localhost:8080/chat  ")

        assert config.api_url == "http://localhost:8080/chat"

    def test_config_fails_with_blank_error_message(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(error_message="   ")

        assert "CHAT_ERROR_MESSAGE" in str(exc_info.value)

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_config_fails_with_non_positive_timeout(self, timeout: float) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(timeout=timeout)

        assert "CHAT_TIMEOUT" in str(exc_info.value)

    def test_config_fails_with_unknown_strategy(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(strategy="sometimes")

        assert "strategy" in str(exc_info.value).lower()


class TestChatRequest:
    """Tests for the outbound request schema."""

    def test_serializes_prefix_message_and_history(self) -> None:
        request = ChatRequest(
            prefix="You are an AI assistant.",
            message="  Hi  ",
            history=[HistoryEntry(role=Role.USER, content="earlier")],
        )

        assert request.model_dump(mode="json") == {
            "prefix": "You are an AI assistant.",
            "message": "Hi",
            "history": [{"role": "user", "content": "earlier"}],
        }

    def test_whitespace_only_message_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ChatRequest(prefix="p", message="   ")
