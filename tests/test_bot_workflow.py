from pathlib import Path
import sys
from datetime import date
from types import SimpleNamespace
from typing import List, Optional
from unittest.mock import AsyncMock

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from report_bot.config import Settings
from report_bot.handlers.errors import handle_unknown_command
from report_bot.handlers.report import handle_report
from report_bot.handlers.roles import handle_add_role, handle_list, handle_remove_user
from report_bot.handlers.start import handle_help, handle_start
from report_bot.handlers.stats import handle_stats
from report_bot.handlers.vacation import handle_vacation
from report_bot.i18n import Translator
from report_bot.main import _on_stop, build_application
from report_bot.models.account import Account, Role
from report_bot.services.accounts import AccountDirectory, AccountRoster
from report_bot.services.reports import ReportService
from report_bot.services.stats import StatsService
from report_bot.services.storage import StorageService
from report_bot.services.vacations import VacationRegistry

ADMIN, MODERATOR, WORKER, STRANGER = 10, 11, 20, 99

VALID_REPORT = "Имя: Борис\nДата: 24.09.2025\nЧасов: 7\nСделано:\n- <b>всё</b>\nПроблемы:\nНет\nПланируется:\nНет"


async def build_bot_data(tmp_path: Path, worker_name: str = "Boris") -> dict:
    storage = StorageService(tmp_path / "bot.sqlite3")
    await storage.init_schema()
    roster = AccountRoster(
        [
            Account(telegram_id=ADMIN, user_name="Admin", role=Role.ADMIN),
            Account(telegram_id=MODERATOR, user_name="Moderator", role=Role.MODERATOR),
            Account(telegram_id=WORKER, user_name=worker_name, role=Role.USER),
        ]
    )
    directory = AccountDirectory(roster, storage)
    await directory.sync_roles()
    translator = Translator()
    return {
        "settings": SimpleNamespace(locale="ru"),
        "storage": storage,
        "translator": translator,
        "directory": directory,
        "vacations": VacationRegistry(),
        "reports": ReportService(storage, roster),
        "stats": StatsService(storage, roster, translator),
    }


def make_update(user_id: int, text: str) -> SimpleNamespace:
    message = SimpleNamespace(text=text, reply_text=AsyncMock())
    return SimpleNamespace(effective_user=SimpleNamespace(id=user_id), effective_message=message, message=message)


def make_context(bot_data: dict, args: Optional[List[str]] = None) -> SimpleNamespace:
    return SimpleNamespace(
        application=SimpleNamespace(bot_data=bot_data),
        args=args or [],
        bot=SimpleNamespace(send_message=AsyncMock()),
        error=None,
    )


def replied(update: SimpleNamespace) -> str:
    return update.message.reply_text.await_args.args[0]


@pytest.mark.asyncio
async def test_start_shows_report_format(tmp_path: Path) -> None:
    bot_data = await build_bot_data(tmp_path)
    update = make_update(STRANGER, "/start")
    await handle_start(update, make_context(bot_data))
    assert "Часов:" in replied(update)


@pytest.mark.asyncio
async def test_help_depends_on_role(tmp_path: Path) -> None:
    bot_data = await build_bot_data(tmp_path)
    worker = make_update(WORKER, "/help")
    await handle_help(worker, make_context(bot_data))
    assert "/vacation" in replied(worker) and "/stats" not in replied(worker)

    admin = make_update(ADMIN, "/help")
    await handle_help(admin, make_context(bot_data))
    assert "/remove_user" in replied(admin)

    stranger = make_update(STRANGER, "/help")
    await handle_help(stranger, make_context(bot_data))
    assert "нет роли" in replied(stranger)


@pytest.mark.asyncio
async def test_vacation_command(tmp_path: Path) -> None:
    bot_data = await build_bot_data(tmp_path)
    vacations: VacationRegistry = bot_data["vacations"]

    update = make_update(WORKER, "/vacation 25.09.2025")
    await handle_vacation(update, make_context(bot_data, ["25.09.2025"]))
    assert vacations.get_vacation_until(WORKER) == date(2025, 9, 25)
    assert "25.09.2025" in replied(update)

    bad = make_update(WORKER, "/vacation 2025-09-30")
    await handle_vacation(bad, make_context(bot_data, ["2025-09-30"]))
    assert "Неверный формат даты" in replied(bad)
    assert vacations.get_vacation_until(WORKER) == date(2025, 9, 25)

    empty = make_update(WORKER, "/vacation")
    await handle_vacation(empty, make_context(bot_data))
    assert "Пример" in replied(empty)

    stranger = make_update(STRANGER, "/vacation 25.09.2025")
    await handle_vacation(stranger, make_context(bot_data, ["25.09.2025"]))
    assert replied(stranger) == "Аккаунт не найден."
    assert vacations.get_vacation_until(STRANGER) is None


@pytest.mark.asyncio
async def test_report_is_stored_and_forwarded_to_admins(tmp_path: Path) -> None:
    bot_data = await build_bot_data(tmp_path)
    update = make_update(WORKER, VALID_REPORT)
    context = make_context(bot_data)
    await handle_report(update, context)

    assert replied(update).startswith("✅")
    assert await bot_data["storage"].has_report_for_user_on_date(WORKER, date(2025, 9, 24))
    forwarded = context.bot.send_message.await_args.kwargs
    assert forwarded["chat_id"] == ADMIN
    assert forwarded["parse_mode"] == "HTML"
    assert "&lt;b&gt;всё&lt;/b&gt;" in forwarded["text"]
    assert "Boris" in forwarded["text"]

    second = make_update(WORKER, VALID_REPORT)
    await handle_report(second, make_context(bot_data))
    assert "не чаще 1 раза" in replied(second)


@pytest.mark.asyncio
async def test_invalid_report_explains_missing_line(tmp_path: Path) -> None:
    bot_data = await build_bot_data(tmp_path)
    update = make_update(WORKER, "Просто текст")
    await handle_report(update, make_context(bot_data))
    text = replied(update)
    assert text.startswith("Неверный формат отчёта")
    assert "\"Имя:\"" in text

    stranger = make_update(STRANGER, VALID_REPORT)
    await handle_report(stranger, make_context(bot_data))
    assert "нет роли" in replied(stranger)


@pytest.mark.asyncio
async def test_role_management_is_admin_only(tmp_path: Path) -> None:
    bot_data = await build_bot_data(tmp_path)
    storage: StorageService = bot_data["storage"]

    denied = make_update(MODERATOR, "/add_admin 55")
    await handle_add_role(denied, make_context(bot_data, ["55"]))
    assert replied(denied) == "Эта команда доступна только администратору."
    assert await storage.get_role(55) is None

    granted = make_update(ADMIN, "/add_moderator@report_bot 55")
    await handle_add_role(granted, make_context(bot_data, ["55"]))
    assert await storage.get_role(55) is Role.MODERATOR
    assert "moderator" in replied(granted)

    usage = make_update(ADMIN, "/add_user")
    await handle_add_role(usage, make_context(bot_data))
    assert "/add_user" in replied(usage)

    removed = make_update(ADMIN, "/remove_user 55")
    await handle_remove_user(removed, make_context(bot_data, ["55"]))
    assert "удалён" in replied(removed)
    missing = make_update(ADMIN, "/remove_user 55")
    await handle_remove_user(missing, make_context(bot_data, ["55"]))
    assert "не найден" in replied(missing)


@pytest.mark.asyncio
async def test_list_and_stats_require_moderator(tmp_path: Path) -> None:
    bot_data = await build_bot_data(tmp_path)

    worker = make_update(WORKER, "/list")
    await handle_list(worker, make_context(bot_data))
    assert "недостаточно прав" in replied(worker)

    moderator = make_update(MODERATOR, "/list")
    await handle_list(moderator, make_context(bot_data))
    listing = replied(moderator).splitlines()
    assert listing[0] == "Список аккаунтов:"
    assert "Name=Boris, ID=20, Role=user" in listing

    await handle_report(make_update(WORKER, VALID_REPORT), make_context(bot_data))
    stats = make_update(MODERATOR, "/stats 20.09.2025-30.09.2025")
    await handle_stats(stats, make_context(bot_data, ["20.09.2025-30.09.2025"]))
    assert "Boris — 7 ч." in replied(stats)

    worker_stats = make_update(WORKER, "/stats 20.09.2025-30.09.2025")
    await handle_stats(worker_stats, make_context(bot_data, ["20.09.2025-30.09.2025"]))
    assert "недостаточно прав" in replied(worker_stats)


@pytest.mark.asyncio
async def test_unknown_command_hint(tmp_path: Path) -> None:
    bot_data = await build_bot_data(tmp_path)
    update = make_update(WORKER, "/dance")
    await handle_unknown_command(update, make_context(bot_data))
    assert "/help" in replied(update)


@pytest.mark.asyncio
async def test_forwarded_report_escapes_sender_name(tmp_path: Path) -> None:
    bot_data = await build_bot_data(tmp_path, worker_name="R&D <team>")
    context = make_context(bot_data)
    await handle_report(make_update(WORKER, VALID_REPORT), context)

    forwarded = context.bot.send_message.await_args.kwargs
    assert forwarded["parse_mode"] == "HTML"
    assert "R&amp;D &lt;team&gt;" in forwarded["text"]
    assert "<team>" not in forwarded["text"]


def test_scheduler_stops_before_bot_shutdown(tmp_path: Path) -> None:
    settings = Settings(
        bot_token="123456:TEST-TOKEN",
        db_path=tmp_path / "app.sqlite3",
        roster_path=tmp_path / "accounts.json",
    )
    application = build_application(settings)
    assert application.post_stop is _on_stop
    assert application.post_shutdown is None


@pytest.mark.asyncio
async def test_stop_hook_stops_running_scheduler() -> None:
    scheduler = SimpleNamespace(stop=AsyncMock())
    await _on_stop(SimpleNamespace(bot_data={"scheduler": scheduler}))
    scheduler.stop.assert_awaited_once()

    await _on_stop(SimpleNamespace(bot_data={}))
