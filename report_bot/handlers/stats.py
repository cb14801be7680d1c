from __future__ import annotations

from telegram import Update
from telegram.ext import ContextTypes

from ..models.account import Role
from ..services.stats import StatsService
from .common import current_account, locale_of, reply


async def handle_stats(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    stats: StatsService = context.application.bot_data["stats"]
    account = await current_account(update, context)
    if account is None or account.role is Role.USER:
        await reply(update, context, "no_permission")
        return
    text = await stats.render(" ".join(context.args or []), locale_of(context))
    await update.effective_message.reply_text(text)
