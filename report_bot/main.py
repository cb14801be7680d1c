from __future__ import annotations

import logging

from telegram.ext import (
    AIORateLimiter,
    Application,
    ApplicationBuilder,
    CommandHandler,
    MessageHandler,
    filters,
)

from .config import Settings, load_settings
from .handlers.errors import handle_error, handle_unknown_command
from .handlers.report import handle_report
from .handlers.roles import ROLE_COMMANDS, handle_add_role, handle_list, handle_remove_user
from .handlers.start import handle_help, handle_start
from .handlers.stats import handle_stats
from .handlers.vacation import handle_vacation
from .i18n import Translator
from .services.accounts import AccountDirectory, load_roster
from .services.dedup import NotificationDedupTracker
from .services.delivery import TelegramDelivery
from .services.reports import ReportService
from .services.scheduler import ReminderScheduler
from .services.stats import StatsService
from .services.storage import StorageService
from .services.timezones import TimeZoneResolver
from .services.vacations import VacationRegistry

LOGGER = logging.getLogger(__name__)


async def _on_startup(application: Application) -> None:
    storage: StorageService = application.bot_data["storage"]
    directory: AccountDirectory = application.bot_data["directory"]
    settings: Settings = application.bot_data["settings"]
    translator: Translator = application.bot_data["translator"]
    await storage.init_schema()
    await directory.sync_roles()
    scheduler = ReminderScheduler(
        directory.roster,
        storage,
        TelegramDelivery(application.bot),
        reminder_text=translator.translate("reminder_text", settings.locale),
        vacations=application.bot_data["vacations"],
        notified=application.bot_data["notified"],
        resolver=TimeZoneResolver(),
        interval_seconds=settings.reminder_interval_seconds,
    )
    application.bot_data["scheduler"] = scheduler
    await scheduler.start()


async def _on_stop(application: Application) -> None:
    scheduler: ReminderScheduler | None = application.bot_data.get("scheduler")
    if scheduler is not None:
        await scheduler.stop()


def build_application(settings: Settings | None = None) -> Application:
    settings = settings or load_settings()
    storage = StorageService(settings.db_path)
    translator = Translator(default_locale=settings.locale)
    roster = load_roster(settings.roster_path)
    directory = AccountDirectory(roster, storage)

    application = (
        ApplicationBuilder()
        .token(settings.bot_token)
        .rate_limiter(AIORateLimiter())
        .post_init(_on_startup)
        .post_stop(_on_stop)
        .build()
    )

    application.bot_data.update(
        {
            "settings": settings,
            "storage": storage,
            "translator": translator,
            "directory": directory,
            "vacations": VacationRegistry(),
            "notified": NotificationDedupTracker(),
            "reports": ReportService(storage, roster, cooldown_hours=settings.report_cooldown_hours),
            "stats": StatsService(storage, roster, translator),
        }
    )

    application.add_handler(CommandHandler("start", handle_start))
    application.add_handler(CommandHandler("help", handle_help))
    application.add_handler(CommandHandler("vacation", handle_vacation))
    application.add_handler(CommandHandler(list(ROLE_COMMANDS), handle_add_role))
    application.add_handler(CommandHandler("remove_user", handle_remove_user))
    application.add_handler(CommandHandler("list", handle_list))
    application.add_handler(CommandHandler("stats", handle_stats))
    application.add_handler(MessageHandler(filters.COMMAND, handle_unknown_command))
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_report))
    application.add_error_handler(handle_error)

    return application


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    application = build_application(settings)
    LOGGER.info("Starting daily report bot")
    application.run_polling(close_loop=False)


if __name__ == "__main__":
    main()
