"""
Outbound Channels.

Lead capture and admin notifications reach a messenger only through a
ChannelAdapter. Telegram is the one implementation; tests swap in a
recording adapter at the same seam.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from sitekit.backend.core.utils import utc_now


@dataclass
class OutboundMessage:
    chat_id: str
    text: str
    created_at: str = field(default_factory=lambda: utc_now().isoformat())


class ChannelAdapter(ABC):
    @property
    @abstractmethod
    def channel_name(self) -> str: ...

    @property
    @abstractmethod
    def max_message_length(self) -> int: ...

    @abstractmethod
    async def deliver(self, message: OutboundMessage) -> None:
        """
        Raises:
            ExternalServiceError: If the channel rejects the message or is unreachable
        """

    async def send_message(self, chat_id: str, text: str) -> None:
        await self.deliver(OutboundMessage(chat_id=chat_id, text=text))

    def chunk_message(self, text: str) -> list[str]:
        """
        Cut `text` into pieces of at most max_message_length.

        Cuts prefer the last blank line in the window, then the last line
        break, and only then fall back to a hard cut. Whitespace at the
        start of each following piece is dropped.
        """
        limit = self.max_message_length
        chunks: list[str] = []
        remaining = text
        while len(remaining) > limit:
            window = remaining[:limit]
            cut = window.rfind("\n\n")
            if cut <= 0:
                cut = window.rfind("\n")
            if cut <= 0:
                cut = limit
            chunks.append(remaining[:cut])
            remaining = remaining[cut:].lstrip()
        if remaining or not chunks:
            chunks.append(remaining)
        return chunks
