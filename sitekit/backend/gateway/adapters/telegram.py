"""
Telegram Channel Adapter.

Posts messages to the Telegram Bot API (`sendMessage`) over httpx in
HTML parse mode. Each bot token has its own circuit breaker (aiobreaker),
and transport failures are retried with tenacity.

A 4xx answer (bad token, unknown chat, malformed HTML) is the caller's
fault: it is reported but never counts against the breaker, so one
misconfigured site cannot cut off the others.
"""

from collections.abc import Callable
from functools import lru_cache

import aiobreaker
import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from sitekit.backend.core.config import get_app_config
from sitekit.backend.core.exceptions import ExternalServiceError
from sitekit.backend.core.logging import get_logger
from sitekit.backend.core.resilience import create_circuit_breaker, retry_logger
from sitekit.backend.gateway.adapters.base import ChannelAdapter, OutboundMessage

logger = get_logger(__name__)

TELEGRAM_MAX_MESSAGE_LENGTH = 4096


class TelegramRejectedError(ExternalServiceError):
    """Telegram refused the request itself (4xx other than 429)."""


def _is_rejection(status_code: int) -> bool:
    return 400 <= status_code < 500 and status_code != 429


@lru_cache
def get_telegram_breaker(bot_token: str = "") -> aiobreaker.CircuitBreaker:
    """Breaker for one bot token."""
    breaker_config = get_app_config().telegram.circuit_breaker
    return create_circuit_breaker(
        "telegram",
        fail_max=breaker_config.fail_max,
        timeout_duration=breaker_config.timeout_duration,
        exclude=[TelegramRejectedError],
    )


class TelegramAdapter(ChannelAdapter):
    """
    Telegram channel adapter bound to one bot token.

    A transport can be injected for tests (httpx.MockTransport).
    """

    def __init__(
        self,
        bot_token: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._bot_token = bot_token
        self._transport = transport
        self._config = get_app_config().telegram

    @property
    def channel_name(self) -> str:
        return "telegram"

    @property
    def max_message_length(self) -> int:
        return TELEGRAM_MAX_MESSAGE_LENGTH

    async def deliver(self, message: OutboundMessage) -> None:
        """
        Deliver a message to a Telegram chat, chunking at 4096 characters.

        Raises:
            ExternalServiceError: If Telegram rejects the message, cannot be
                reached, or the circuit is open
        """
        chunks = self.chunk_message(message.text)
        try:
            for chunk in chunks:
                await get_telegram_breaker(self._bot_token).call_async(
                    self._post_with_retry,
                    message.chat_id,
                    chunk,
                )
        except aiobreaker.CircuitBreakerError as e:
            logger.error("Telegram circuit open", extra={"chat_id": message.chat_id})
            raise ExternalServiceError("Telegram is temporarily unavailable") from e
        except httpx.HTTPError as e:
            logger.error(
                "Telegram request failed",
                extra={"chat_id": message.chat_id, "error": str(e)},
            )
            raise ExternalServiceError("Failed to send Telegram message") from e

        logger.debug(
            "Telegram message delivered",
            extra={
                "chat_id": message.chat_id,
                "chunks": len(chunks),
                "total_length": len(message.text),
            },
        )

    async def _post_with_retry(self, chat_id: str, text: str) -> None:
        retry_config = self._config.retry
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(retry_config.max_attempts),
            wait=wait_exponential(
                multiplier=retry_config.backoff_multiplier,
                max=retry_config.backoff_max,
            ),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=retry_logger("telegram"),
            reraise=True,
        ):
            with attempt:
                await self._post(chat_id, text)

    async def _post(self, chat_id: str, text: str) -> None:
        url = f"{self._config.api_base_url}/bot{self._bot_token}/sendMessage"
        payload = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": self._config.parse_mode,
        }
        async with httpx.AsyncClient(
            timeout=self._config.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.post(url, json=payload)

        if response.status_code == 200:
            return

        logger.warning(
            "Telegram API rejected message",
            extra={
                "chat_id": chat_id,
                "status": response.status_code,
                "body": response.text[:500],
            },
        )
        if _is_rejection(response.status_code):
            raise TelegramRejectedError("Failed to send Telegram message")
        raise ExternalServiceError("Failed to send Telegram message")


TelegramFactory = Callable[[str], ChannelAdapter]


def get_telegram_factory() -> TelegramFactory:
    """Dependency returning the adapter constructor (overridden in tests)."""
    return TelegramAdapter
