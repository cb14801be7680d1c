from __future__ import annotations

"""Account administration: roles, removal, listing."""
import logging
from typing import Optional

from telegram import Update
from telegram.ext import ContextTypes

from ..models.account import Role
from ..services.accounts import AccountDirectory
from ..services.storage import StorageService
from .common import current_account, reply

LOGGER = logging.getLogger(__name__)

ROLE_COMMANDS = {
    "add_admin": Role.ADMIN,
    "add_moderator": Role.MODERATOR,
    "add_user": Role.USER,
}


def _command_name(update: Update) -> str:
    text = update.effective_message.text if update.effective_message else None
    parts = (text or "").split(maxsplit=1)
    if not parts:
        return ""
    return parts[0].lstrip("/").split("@", 1)[0].lower()


def _target_id(context: ContextTypes.DEFAULT_TYPE) -> Optional[int]:
    if not context.args:
        return None
    token = context.args[0].strip()
    return int(token) if token.isdigit() else None


async def handle_add_role(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    storage: StorageService = context.application.bot_data["storage"]
    account = await current_account(update, context)
    if account is None or account.role is not Role.ADMIN:
        await reply(update, context, "admin_only")
        return
    command = _command_name(update)
    role = ROLE_COMMANDS.get(command, Role.USER)
    if not context.args:
        await reply(update, context, "role_usage", command=f"/{command}")
        return
    target = _target_id(context)
    if target is None:
        await reply(update, context, "bad_user_id")
        return
    await storage.upsert_account(target, role)
    LOGGER.info("Admin %s set role %s for %s", account.telegram_id, role.value, target)
    await reply(update, context, "role_set", user_id=target, role=role.value)


async def handle_remove_user(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    storage: StorageService = context.application.bot_data["storage"]
    account = await current_account(update, context)
    if account is None or account.role is not Role.ADMIN:
        await reply(update, context, "admin_only")
        return
    if not context.args:
        await reply(update, context, "remove_usage")
        return
    target = _target_id(context)
    if target is None:
        await reply(update, context, "bad_user_id")
        return
    removed = await storage.remove_account(target)
    await reply(update, context, "user_removed" if removed else "user_not_found", user_id=target)


async def handle_list(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    storage: StorageService = context.application.bot_data["storage"]
    directory: AccountDirectory = context.application.bot_data["directory"]
    translator = context.application.bot_data["translator"]
    locale = context.application.bot_data["settings"].locale
    account = await current_account(update, context)
    if account is None or account.role is Role.USER:
        await reply(update, context, "no_permission")
        return
    accounts = await storage.list_accounts()
    if not accounts:
        await reply(update, context, "list_empty")
        return
    lines = [translator.translate("list_header", locale)]
    for telegram_id, role in accounts:
        lines.append(
            translator.translate(
                "list_line", locale, name=directory.roster.user_name(telegram_id), user_id=telegram_id, role=role.value
            )
        )
    await update.effective_message.reply_text("\n".join(lines))
