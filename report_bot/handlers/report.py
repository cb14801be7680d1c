from __future__ import annotations

"""Plain-text messages are treated as daily report submissions."""
import logging

from telegram import Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from ..i18n import Translator
from ..services.reports import ReportRejected, ReportService
from .common import current_account, locale_of, reply

LOGGER = logging.getLogger(__name__)


async def handle_report(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    reports: ReportService = context.application.bot_data["reports"]
    translator: Translator = context.application.bot_data["translator"]
    message = update.message
    if not message or not message.text or not update.effective_user:
        return
    account = await current_account(update, context)
    try:
        submitted = await reports.submit(account, update.effective_user.id, message.text)
    except ReportRejected as exc:
        if exc.key == "report_invalid":
            reason = translator.translate(str(exc.params["reason_key"]), locale_of(context))
            await reply(update, context, "report_invalid", parse_mode=ParseMode.HTML, reason=reason)
        else:
            await reply(update, context, exc.key, **exc.params)
        return

    await reply(update, context, "report_received")
    forward = translator.translate(
        "report_forward", locale_of(context), name=submitted.escaped_name(), text=submitted.escaped_text()
    )
    for admin_id in submitted.admin_ids:
        try:
            await context.bot.send_message(chat_id=admin_id, text=forward, parse_mode=ParseMode.HTML)
        except TelegramError as exc:
            LOGGER.warning("Could not forward report to admin %s: %s", admin_id, exc)
