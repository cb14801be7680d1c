from __future__ import annotations

"""Translation catalog for user-facing texts (RU default, EN)."""
from dataclasses import dataclass, field
from typing import Any, Dict

_REPORT_FORMAT_RU = (
    "📋 <b>Формат отчета:</b>\n\n"
    "Имя: [Ваше имя]\n"
    "Дата: [ДД.ММ.ГГГГ]\n"
    "Часов: [Количество отработанных часов]\n"
    "Сделано:\n- [Описание выполненной работы]\n"
    "Проблемы:\n- [Если есть, перечислите]\n"
    "Планируется:\n- [Планы на завтра/дальнейшую работу]"
)

_REPORT_FORMAT_EN = (
    "📋 <b>Report format</b> (labels stay in Russian):\n\n"
    "Имя: [your name]\n"
    "Дата: [DD.MM.YYYY]\n"
    "Часов: [hours worked]\n"
    "Сделано:\n- [what was done]\n"
    "Проблемы:\n- [problems, if any]\n"
    "Планируется:\n- [plans for tomorrow]"
)


@dataclass
class Translator:
    default_locale: str = "ru"
    _translations: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self._translations:
            return
        self._translations = {
            "ru": {
                "start_message": "👋 Привет! Я бот для приема отчетов. Пожалуйста, отправьте отчет в следующем формате:\n\n"
                + _REPORT_FORMAT_RU,
                "reminder_text": "Напоминание: Вы не отправили дневной отчет за сегодня. Пожалуйста, отправьте его.",
                "no_role": "У вас нет роли в системе. Обратитесь к администратору.",
                "account_not_found": "Аккаунт не найден.",
                "no_permission": "У вас недостаточно прав для этой команды.",
                "admin_only": "Эта команда доступна только администратору.",
                "unknown_command": "Неизвестная команда. Используйте /help.",
                "vacation_usage": "Укажите дату в формате DD.MM.YYYY.\nПример: /vacation 25.09.2025",
                "vacation_bad_date": "Неверный формат даты. Используйте DD.MM.YYYY.\nПример: /vacation 25.09.2025",
                "vacation_set": "Ок! Напоминания отключены до {until} включительно.",
                "role_usage": "Укажите: {command} [TelegramID]",
                "bad_user_id": "TelegramID должен быть числом.",
                "role_set": "Теперь пользователь {user_id} имеет роль {role}.",
                "remove_usage": "Укажите: /remove_user [TelegramID]",
                "user_removed": "Пользователь {user_id} удалён из базы.",
                "user_not_found": "Пользователь {user_id} не найден в базе.",
                "list_empty": "Список аккаунтов пуст.",
                "list_header": "Список аккаунтов:",
                "list_line": "Name={name}, ID={user_id}, Role={role}",
                "stats_usage": "Введите: /stats [ID] [DD.MM.YYYY-DD.MM.YYYY]\nлибо /stats DD.MM.YYYY-DD.MM.YYYY",
                "stats_bad_user_range": "Неверный формат дат. Пример: /stats 123456789 01.02.2025-06.02.2025",
                "stats_bad_range": "Неверный формат дат. Пример: /stats 01.02.2025-06.02.2025",
                "stats_user_empty": "Отчётов пользователя {user_id} за период {date_from}-{date_to} не найдено.",
                "stats_empty": "Отчётов за период {date_from}-{date_to} не найдено.",
                "stats_header": "Статистика за {date_from}-{date_to}:",
                "stats_total_line": "{name} — {hours} ч.",
                "report_cooldown": "Вы можете отправлять отчёт не чаще 1 раза в 24 часа. Попробуйте снова через {hours} часов.",
                "report_invalid": "Неверный формат отчёта.\n\nВы отправили отчет в неправильном формате.\n\n"
                + _REPORT_FORMAT_RU
                + "\n\n{reason}",
                "report_missing_name": "В вашем отчете нет или неверна строка \"Имя:\"",
                "report_missing_date": "В вашем отчете нет или неверна строка \"Дата:\"",
                "report_missing_hours": "В вашем отчете нет или неверна строка \"Часов:\"",
                "report_missing_done": "В вашем отчете нет или неверна строка \"Сделано:\"",
                "report_missing_problems": "В вашем отчете нет или неверна строка \"Проблемы:\". Если нет проблем, напишите \"Нет\"",
                "report_missing_plans": "В вашем отчете нет или неверна строка \"Планируется:\". Если нет планов, напишите \"Нет\"",
                "report_bad_date": "Неверный формат даты. Используйте ДД.ММ.ГГГГ (например, 06.02.2025).",
                "report_bad_hours": "Невозможно определить количество часов (нужно целое число).",
                "report_received": "✅ Отчёт получен! Спасибо.",
                "report_forward": "📌 <b>Новый отчёт от {name}:</b>\n\n{text}",
                "help_user": "Доступные команды:\n/start — формат отчета\n/help — эта справка\n"
                "/vacation DD.MM.YYYY — отключить напоминания до даты включительно\n\n"
                "Чтобы сдать отчет, просто отправьте его текстом.",
                "help_moderator": "Доступные команды:\n/start — формат отчета\n/help — эта справка\n"
                "/vacation DD.MM.YYYY — отключить напоминания до даты включительно\n"
                "/list — список аккаунтов\n"
                "/stats [ID] DD.MM.YYYY-DD.MM.YYYY — статистика по отчетам",
                "help_admin": "Доступные команды:\n/start — формат отчета\n/help — эта справка\n"
                "/vacation DD.MM.YYYY — отключить напоминания до даты включительно\n"
                "/list — список аккаунтов\n"
                "/stats [ID] DD.MM.YYYY-DD.MM.YYYY — статистика по отчетам\n"
                "/add_admin, /add_moderator, /add_user [TelegramID] — назначить роль\n"
                "/remove_user [TelegramID] — удалить аккаунт",
            },
            "en": {
                "start_message": "👋 Hi! I collect daily reports. Please send your report in this format:\n\n"
                + _REPORT_FORMAT_EN,
                "reminder_text": "Reminder: you have not sent today's daily report yet. Please send it.",
                "no_role": "You have no role in the system. Please contact an administrator.",
                "account_not_found": "Account not found.",
                "no_permission": "You are not allowed to use this command.",
                "admin_only": "This command is available to administrators only.",
                "unknown_command": "Unknown command. Use /help.",
                "vacation_usage": "Give a date as DD.MM.YYYY.\nExample: /vacation 25.09.2025",
                "vacation_bad_date": "Invalid date. Use DD.MM.YYYY.\nExample: /vacation 25.09.2025",
                "vacation_set": "OK! Reminders are off until {until} inclusive.",
                "role_usage": "Usage: {command} [TelegramID]",
                "bad_user_id": "TelegramID must be a number.",
                "role_set": "User {user_id} now has role {role}.",
                "remove_usage": "Usage: /remove_user [TelegramID]",
                "user_removed": "User {user_id} was removed.",
                "user_not_found": "User {user_id} was not found.",
                "list_empty": "No accounts.",
                "list_header": "Accounts:",
                "list_line": "Name={name}, ID={user_id}, Role={role}",
                "stats_usage": "Usage: /stats [ID] [DD.MM.YYYY-DD.MM.YYYY]\nor /stats DD.MM.YYYY-DD.MM.YYYY",
                "stats_bad_user_range": "Invalid dates. Example: /stats 123456789 01.02.2025-06.02.2025",
                "stats_bad_range": "Invalid dates. Example: /stats 01.02.2025-06.02.2025",
                "stats_user_empty": "No reports from user {user_id} for {date_from}-{date_to}.",
                "stats_empty": "No reports for {date_from}-{date_to}.",
                "stats_header": "Statistics for {date_from}-{date_to}:",
                "stats_total_line": "{name} — {hours} h.",
                "report_cooldown": "You can send a report once every 24 hours. Try again in {hours} hours.",
                "report_invalid": "Invalid report format.\n\n" + _REPORT_FORMAT_EN + "\n\n{reason}",
                "report_missing_name": "The \"Имя:\" line is missing or invalid",
                "report_missing_date": "The \"Дата:\" line is missing or invalid",
                "report_missing_hours": "The \"Часов:\" line is missing or invalid",
                "report_missing_done": "The \"Сделано:\" line is missing or invalid",
                "report_missing_problems": "The \"Проблемы:\" line is missing or invalid. Write \"Нет\" if there are none",
                "report_missing_plans": "The \"Планируется:\" line is missing or invalid. Write \"Нет\" if there are none",
                "report_bad_date": "Invalid date. Use DD.MM.YYYY (e.g. 06.02.2025).",
                "report_bad_hours": "Could not read the hours (a whole number is required).",
                "report_received": "✅ Report received, thank you!",
                "report_forward": "📌 <b>New report from {name}:</b>\n\n{text}",
                "help_user": "Commands:\n/start — report format\n/help — this help\n"
                "/vacation DD.MM.YYYY — mute reminders until the date inclusive\n\n"
                "To submit a report just send it as a message.",
                "help_moderator": "Commands:\n/start — report format\n/help — this help\n"
                "/vacation DD.MM.YYYY — mute reminders until the date inclusive\n"
                "/list — list accounts\n"
                "/stats [ID] DD.MM.YYYY-DD.MM.YYYY — report statistics",
                "help_admin": "Commands:\n/start — report format\n/help — this help\n"
                "/vacation DD.MM.YYYY — mute reminders until the date inclusive\n"
                "/list — list accounts\n"
                "/stats [ID] DD.MM.YYYY-DD.MM.YYYY — report statistics\n"
                "/add_admin, /add_moderator, /add_user [TelegramID] — assign a role\n"
                "/remove_user [TelegramID] — remove an account",
            },
        }

    def translate(self, key: str, locale: str | None = None, **params: Any) -> str:
        catalog = self._translations.get(locale or self.default_locale) or self._translations[self.default_locale]
        text = catalog.get(key, key)
        return text.format(**params) if params else text
