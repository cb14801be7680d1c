from __future__ import annotations

import logging

from telegram import Update
from telegram.ext import ContextTypes

from .common import reply

LOGGER = logging.getLogger(__name__)


async def handle_unknown_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await reply(update, context, "unknown_command")


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    LOGGER.error("Error while handling Telegram update %r", update, exc_info=context.error)
