"""
Resilience Events.

Outbound integrations wrap their calls as

    circuit breaker (aiobreaker) -> retry (tenacity) -> httpx timeout -> call

and report what happens through this module, so breaker transitions and
retries show up in logs/system.jsonl with a `resilience_event` field:

    jq 'select(.resilience_event != null)' logs/system.jsonl
"""

from collections.abc import Callable, Sequence
from datetime import timedelta
from typing import Any

import aiobreaker
from tenacity import RetryCallState

from sitekit.backend.core.logging import get_logger

logger = get_logger(__name__)

BREAKER_EVENTS = {
    "open": "circuit_breaker_opened",
    "half-open": "circuit_breaker_half_open",
    "closed": "circuit_breaker_closed",
}


class ResilienceLogger(aiobreaker.CircuitBreakerListener):
    """Logs breaker transitions (error when it opens) and recorded failures."""

    def __init__(self, dependency: str) -> None:
        self.dependency = dependency

    def state_change(self, cb: aiobreaker.CircuitBreaker, old_state: Any, new_state: Any) -> None:
        state = str(new_state).lower()
        log = logger.error if state == "open" else logger.info
        log(
            f"Circuit breaker {self.dependency}: {old_state} -> {new_state}",
            extra={
                "resilience_event": BREAKER_EVENTS.get(state, f"circuit_breaker_{state}"),
                "dependency": self.dependency,
                "failure_count": cb.fail_counter,
            },
        )

    def failure(self, cb: aiobreaker.CircuitBreaker, exception: Exception) -> None:
        logger.warning(
            f"Circuit breaker {self.dependency}: failure recorded",
            extra={
                "resilience_event": "circuit_breaker_failure",
                "dependency": self.dependency,
                "failure_count": cb.fail_counter,
                "error": str(exception),
            },
        )


def retry_logger(dependency: str) -> Callable[[RetryCallState], None]:
    """
    Build a tenacity `before_sleep` callback for one dependency.

    The dependency is named explicitly because AsyncRetrying used as an
    iterator has no wrapped function to take a name from.
    """

    def log_retry(retry_state: RetryCallState) -> None:
        duration_ms = None
        if retry_state.outcome_timestamp and retry_state.start_time:
            duration_ms = round((retry_state.outcome_timestamp - retry_state.start_time) * 1000)

        error = None
        if retry_state.outcome and retry_state.outcome.failed:
            error = str(retry_state.outcome.exception())

        logger.warning(
            f"Retrying {dependency} (attempt {retry_state.attempt_number})",
            extra={
                "resilience_event": "retry_attempt",
                "dependency": dependency,
                "attempt": retry_state.attempt_number,
                "duration_ms": duration_ms,
                "error": error,
            },
        )

    return log_retry


def create_circuit_breaker(
    dependency: str,
    fail_max: int = 5,
    timeout_duration: int = 30,
    exclude: Sequence[type[Exception]] = (),
) -> aiobreaker.CircuitBreaker:
    """
    Breaker that opens after `fail_max` consecutive failures and lets a
    trial call through after `timeout_duration` seconds.

    Exceptions in `exclude` pass through without counting as failures.
    """
    return aiobreaker.CircuitBreaker(
        fail_max=fail_max,
        timeout_duration=timedelta(seconds=timeout_duration),
        exclude=list(exclude),
        listeners=[ResilienceLogger(dependency)],
    )
