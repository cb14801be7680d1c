from __future__ import annotations

from typing import Any, Optional

from telegram import Update
from telegram.ext import ContextTypes

from ..i18n import Translator
from ..models.account import Account
from ..services.accounts import AccountDirectory


def locale_of(context: ContextTypes.DEFAULT_TYPE) -> str:
    return context.application.bot_data["settings"].locale


async def current_account(update: Update, context: ContextTypes.DEFAULT_TYPE) -> Optional[Account]:
    directory: AccountDirectory = context.application.bot_data["directory"]
    if not update.effective_user:
        return None
    return await directory.lookup(update.effective_user.id)


async def reply(update: Update, context: ContextTypes.DEFAULT_TYPE, key: str, parse_mode: Optional[str] = None, **params: Any) -> None:
    translator: Translator = context.application.bot_data["translator"]
    if update.effective_message is None:
        return
    await update.effective_message.reply_text(translator.translate(key, locale_of(context), **params), parse_mode=parse_mode)
