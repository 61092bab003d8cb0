"""
Telegram Notifications.

Resolves which bot and chat a site's notifications go to and sends
messages through the Telegram channel adapter.

Resolution for a site:
    1. settings `<site>_telegram_bot_token` and `<site>_telegram_chat_id`
    2. otherwise the TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID secrets
    3. otherwise the site is not configured
"""

from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.config import get_app_config, get_settings
from sitekit.backend.core.exceptions import ExternalServiceError, ServiceNotConfiguredError
from sitekit.backend.core.logging import get_logger
from sitekit.backend.gateway.adapters.telegram import TelegramFactory
from sitekit.backend.repositories.site import SiteSettingRepository

logger = get_logger(__name__)


@dataclass
class TelegramTarget:
    bot_token: str
    chat_id: str
    source: str


def local_timestamp(now: datetime | None = None) -> str:
    """Current time in the configured notification timezone (Europe/Warsaw)."""
    tz = ZoneInfo(get_app_config().telegram.timezone)
    now = now or datetime.now(tz)
    return now.astimezone(tz).strftime("%d.%m.%Y, %H:%M:%S")


class TelegramNotifier:
    """Sends HTML messages to the Telegram chat configured for a site."""

    def __init__(self, session: AsyncSession, factory: TelegramFactory) -> None:
        self.settings_repo = SiteSettingRepository(session)
        self.factory = factory

    async def resolve(self, site: str) -> TelegramTarget:
        """
        Find the bot token and chat id for a site.

        Raises:
            ServiceNotConfiguredError: If neither the site nor the environment
                provides both values
        """
        token = await self.settings_repo.get_value(f"{site}_telegram_bot_token")
        chat_id = await self.settings_repo.get_value(f"{site}_telegram_chat_id")
        if token and chat_id:
            return TelegramTarget(bot_token=token, chat_id=chat_id, source="site")

        secrets = get_settings()
        if secrets.telegram_bot_token and secrets.telegram_chat_id:
            return TelegramTarget(
                bot_token=secrets.telegram_bot_token,
                chat_id=secrets.telegram_chat_id,
                source="environment",
            )

        logger.warning("Telegram not configured", extra={"site": site})
        raise ServiceNotConfiguredError("Telegram is not configured")

    async def is_configured(self, site: str) -> bool:
        try:
            await self.resolve(site)
        except ServiceNotConfiguredError:
            return False
        return True

    async def send(self, site: str, text: str, copy_to_personal: bool = False) -> None:
        """
        Send a message to the site's chat.

        With `copy_to_personal`, the same message also goes to
        TELEGRAM_PERSONAL_CHAT_ID when it is set; a failure there is
        logged and does not affect the main delivery.

        Raises:
            ServiceNotConfiguredError: If the site has no Telegram target
            ExternalServiceError: If Telegram rejects the message
        """
        target = await self.resolve(site)
        adapter = self.factory(target.bot_token)
        await adapter.send_message(target.chat_id, text)
        logger.info(
            "Telegram notification sent",
            extra={"site": site, "source": target.source, "length": len(text)},
        )

        personal_chat = get_settings().telegram_personal_chat_id
        if copy_to_personal and personal_chat and personal_chat != target.chat_id:
            try:
                await adapter.send_message(personal_chat, text)
            except ExternalServiceError as e:
                logger.warning(
                    "Personal Telegram copy failed",
                    extra={"site": site, "error": str(e)},
                )
