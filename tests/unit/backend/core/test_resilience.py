"""Unit tests for sitekit.backend.core.resilience."""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest

from sitekit.backend.core.resilience import (
    ResilienceLogger,
    create_circuit_breaker,
    retry_logger,
)

def breaker_state(fail_counter: int) -> MagicMock:
    cb = MagicMock()
    cb.fail_counter = fail_counter
    return cb

class TestResilienceLogger:
    @pytest.mark.parametrize(
        ("old", "new", "level", "event"),
        [
            ("closed", "open", "error", "circuit_breaker_opened"),
            ("open", "half-open", "info", "circuit_breaker_half_open"),
            ("half-open", "closed", "info", "circuit_breaker_closed"),
        ],
    )
    def test_state_changes(self, mock_logger, old, new, level, event):
        with patch("sitekit.backend.core.resilience.logger", mock_logger):
            ResilienceLogger("telegram").state_change(breaker_state(5), old, new)

        log_call = getattr(mock_logger, level)
        log_call.assert_called_once()
        extra = log_call.call_args.kwargs["extra"]
        assert extra["resilience_event"] == event
        assert extra["dependency"] == "telegram"

    def test_failure_recorded(self, mock_logger):
        with patch("sitekit.backend.core.resilience.logger", mock_logger):
            ResilienceLogger("telegram").failure(breaker_state(2), ConnectionError("timeout"))

        extra = mock_logger.warning.call_args.kwargs["extra"]
        assert extra["resilience_event"] == "circuit_breaker_failure"
        assert extra["failure_count"] == 2
        assert extra["error"] == "timeout"

class TestRetryLogger:
    def test_emits_structured_event(self, mock_logger):
        state = MagicMock()
        state.attempt_number = 2
        state.outcome_timestamp = 1000.5
        state.start_time = 1000.0
        state.outcome.failed = True
        state.outcome.exception.return_value = ConnectionError("refused")

        with patch("sitekit.backend.core.resilience.logger", mock_logger):
            retry_logger("telegram")(state)

        message, extra = mock_logger.warning.call_args.args[0], mock_logger.warning.call_args.kwargs["extra"]
        assert message == "Retrying telegram (attempt 2)"
        assert extra == {
            "resilience_event": "retry_attempt",
            "dependency": "telegram",
            "attempt": 2,
            "duration_ms": 500,
            "error": "refused",
        }

    def test_first_attempt_without_outcome(self, mock_logger):
        state = MagicMock()
        state.attempt_number = 1
        state.outcome_timestamp = None
        state.start_time = None
        state.outcome = None

        with patch("sitekit.backend.core.resilience.logger", mock_logger):
            retry_logger("telegram")(state)

        extra = mock_logger.warning.call_args.kwargs["extra"]
        assert extra["dependency"] == "telegram"
        assert extra["duration_ms"] is None
        assert extra["error"] is None


class TestCreateCircuitBreaker:
    def test_returns_configured_breaker(self):
        cb = create_circuit_breaker("telegram", fail_max=3, timeout_duration=15)

        assert cb.fail_max == 3
        assert cb.timeout_duration == timedelta(seconds=15)
        assert [listener.dependency for listener in cb.listeners] == ["telegram"]

    def test_default_values(self):
        cb = create_circuit_breaker("default-dep")

        assert cb.fail_max == 5
        assert cb.timeout_duration == timedelta(seconds=30)

    @pytest.mark.asyncio
    async def test_excluded_errors_do_not_count(self):
        cb = create_circuit_breaker("telegram", fail_max=2, exclude=[LookupError])

        async def rejected():
            raise KeyError("chat not found")

        for _ in range(3):
            with pytest.raises(KeyError):
                await cb.call_async(rejected)

        assert cb.fail_counter == 0
        assert cb.current_state.name.lower() == "closed"
