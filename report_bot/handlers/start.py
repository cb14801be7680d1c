from __future__ import annotations

"""Start and help handlers."""
from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from .common import current_account, reply


async def handle_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await reply(update, context, "start_message", parse_mode=ParseMode.HTML)


async def handle_help(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    account = await current_account(update, context)
    if account is None:
        await reply(update, context, "no_role")
        return
    await reply(update, context, f"help_{account.role.value}")
