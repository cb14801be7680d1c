from __future__ import annotations

"""Thin wrapper around the Telegram bot used for outgoing texts."""
import logging
from typing import Optional

from telegram import Bot
from telegram.error import TelegramError

LOGGER = logging.getLogger(__name__)


class DeliveryError(Exception):
    """Raised when a message could not be handed over to Telegram."""

    def __init__(self, user_id: int, reason: str) -> None:
        super().__init__(f"delivery to {user_id} failed: {reason}")
        self.user_id = user_id
        self.reason = reason


class TelegramDelivery:
    def __init__(self, bot: Bot) -> None:
        self._bot = bot

    async def send_text(self, user_id: int, text: str, *, parse_mode: Optional[str] = None) -> None:
        try:
            await self._bot.send_message(chat_id=user_id, text=text, parse_mode=parse_mode)
        except TelegramError as exc:
            raise DeliveryError(user_id, str(exc)) from exc
        LOGGER.debug("Delivered %d chars to %s", len(text), user_id)
