from __future__ import annotations

import logging

from telegram import Update
from telegram.ext import ContextTypes

from ..services.parser import DATE_FORMAT, parse_day
from ..services.vacations import VacationRegistry
from .common import current_account, reply

LOGGER = logging.getLogger(__name__)


async def handle_vacation(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    vacations: VacationRegistry = context.application.bot_data["vacations"]
    account = await current_account(update, context)
    if account is None:
        await reply(update, context, "account_not_found")
        return
    argument = " ".join(context.args or []).strip()
    if not argument:
        await reply(update, context, "vacation_usage")
        return
    until = parse_day(argument)
    if until is None:
        await reply(update, context, "vacation_bad_date")
        return
    vacations.set_vacation_until(account.telegram_id, until)
    LOGGER.info("User %s is on vacation until %s", account.telegram_id, until.isoformat())
    await reply(update, context, "vacation_set", until=until.strftime(DATE_FORMAT))
