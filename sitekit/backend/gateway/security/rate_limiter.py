"""
Fixed-Window Rate Limiter.

Config-driven, per-client rate limiting.
Reads limits from config/settings/security.yaml.
Uses in-memory storage; counters live on the FastAPI app instance.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

from starlette.requests import Request

from sitekit.backend.core.config import get_app_config
from sitekit.backend.core.config_schema import RateLimitingSchema
from sitekit.backend.core.exceptions import RateLimitError
from sitekit.backend.core.logging import get_logger

logger = get_logger(__name__)

LIMITER_NAMES = ("api", "login", "password_change", "leads")


class RateLimitResult:
    """Result of a rate limit check."""

    def __init__(
        self,
        allowed: bool,
        retry_after_seconds: int = 0,
        remaining: int = 0,
    ) -> None:
        self.allowed = allowed
        self.retry_after_seconds = retry_after_seconds
        self.remaining = remaining


@dataclass
class _Window:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """
    Fixed-window counter keyed by client.

    The first hit opens a window of `window_seconds`; every hit inside
    the window increments the counter and hits beyond `max_requests`
    are rejected until the window resets. Expired windows are swept
    lazily, at most once per `sweep_interval_seconds`.
    """

    def __init__(
        self,
        name: str,
        max_requests: int,
        window_seconds: int,
        sweep_interval_seconds: int = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._last_sweep = clock()

    def check(self, key: str) -> RateLimitResult:
        """
        Count a hit for `key` and report whether it is within the limit.

        Args:
            key: Client identifier (usually the IP address)

        Returns:
            RateLimitResult indicating whether the request is allowed
        """
        now = self._clock()
        if now - self._last_sweep >= self.sweep_interval_seconds:
            self.sweep()

        window = self._windows.get(key)
        if window is None or now >= window.reset_at:
            self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
            return RateLimitResult(allowed=True, remaining=self.max_requests - 1)

        if window.count >= self.max_requests:
            retry_after = max(1, int(window.reset_at - now + 0.999))
            logger.warning(
                "Rate limit exceeded",
                extra={"limiter": self.name, "client": key, "limit": self.max_requests},
            )
            return RateLimitResult(allowed=False, retry_after_seconds=retry_after)

        window.count += 1
        return RateLimitResult(allowed=True, remaining=self.max_requests - window.count)

    def release(self, key: str) -> None:
        """Undo one counted hit, e.g. for requests that should not count."""
        window = self._windows.get(key)
        if window is not None and window.count > 0:
            window.count -= 1

    def sweep(self) -> int:
        """Drop expired windows. Returns the number of entries removed."""
        now = self._clock()
        expired = [key for key, window in self._windows.items() if now >= window.reset_at]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now
        if expired:
            logger.debug(
                "Rate limit windows swept",
                extra={"limiter": self.name, "removed": len(expired)},
            )
        return len(expired)

    def __len__(self) -> int:
        return len(self._windows)


class RateLimiterRegistry:
    """Named limiters built from the security.yaml rate_limiting section."""

    def __init__(
        self,
        config: RateLimitingSchema,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.trust_forwarded_for = config.trust_forwarded_for
        self._limiters = {
            name: FixedWindowRateLimiter(
                name=name,
                max_requests=getattr(config, name).max_requests,
                window_seconds=getattr(config, name).window_seconds,
                sweep_interval_seconds=config.sweep_interval_seconds,
                clock=clock,
            )
            for name in LIMITER_NAMES
        }

    def get(self, name: str) -> FixedWindowRateLimiter:
        return self._limiters[name]

    def client_key(self, request: Request) -> str:
        """Client identifier for rate limiting (IP address)."""
        if self.trust_forwarded_for:
            forwarded = request.headers.get("x-forwarded-for")
            if forwarded:
                return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"


def create_rate_limiters() -> RateLimiterRegistry:
    """Build a fresh registry from the current configuration."""
    return RateLimiterRegistry(get_app_config().security.rate_limiting)


def get_rate_limiters(request: Request) -> RateLimiterRegistry:
    """Registry attached to the running app (see create_app)."""
    return request.app.state.rate_limiters


def enforce_rate_limit(request: Request, name: str) -> str:
    """
    Count the request against limiter `name`.

    Returns:
        The client key used, so callers can release the hit later

    Raises:
        RateLimitError: If the client is over the limit
    """
    registry = get_rate_limiters(request)
    key = registry.client_key(request)
    result = registry.get(name).check(key)
    if not result.allowed:
        raise RateLimitError(
            "Too many requests. Please try again later.",
            retry_after_seconds=result.retry_after_seconds,
        )
    return key
