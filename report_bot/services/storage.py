from __future__ import annotations

"""Async storage layer for daily reports and account roles."""
import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Tuple

import aiosqlite

from ..models.account import Role
from ..models.report import DailyReport

LOGGER = logging.getLogger(__name__)


class StorageService:
    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

    async def _connect(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    async def init_schema(self) -> None:
        conn = await self._connect()
        try:
            await conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS reports (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id INTEGER NOT NULL,
                    user_name TEXT NOT NULL,
                    report_date TEXT NOT NULL,
                    hours_worked INTEGER NOT NULL,
                    report_text TEXT NOT NULL DEFAULT '',
                    received_at TEXT NOT NULL
                );
                CREATE INDEX IF NOT EXISTS idx_reports_user_date ON reports(user_id, report_date);
                CREATE TABLE IF NOT EXISTS accounts (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    telegram_id INTEGER NOT NULL UNIQUE,
                    role TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                );
                """
            )
            await conn.commit()
        finally:
            await conn.close()

    async def insert_report(self, report: DailyReport) -> int:
        conn = await self._connect()
        try:
            cursor = await conn.execute(
                """
                INSERT INTO reports (user_id, user_name, report_date, hours_worked, report_text, received_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    report.user_id,
                    report.user_name,
                    report.report_date.isoformat(),
                    report.hours_worked,
                    report.text,
                    report.received_at.isoformat(),
                ),
            )
            await conn.commit()
            return int(cursor.lastrowid)
        finally:
            await conn.close()

    async def reports_by_date_range(self, date_from: date, date_to: date) -> List[DailyReport]:
        conn = await self._connect()
        try:
            cursor = await conn.execute(
                "SELECT * FROM reports WHERE report_date BETWEEN ? AND ? ORDER BY report_date, id",
                (date_from.isoformat(), date_to.isoformat()),
            )
            rows = await cursor.fetchall()
        finally:
            await conn.close()
        return [self._row_to_report(row) for row in rows]

    async def last_report_by_user(self, user_id: int) -> Optional[DailyReport]:
        conn = await self._connect()
        try:
            cursor = await conn.execute(
                "SELECT * FROM reports WHERE user_id=? ORDER BY received_at DESC, id DESC LIMIT 1",
                (user_id,),
            )
            row = await cursor.fetchone()
        finally:
            await conn.close()
        return self._row_to_report(row) if row else None

    async def has_report_for_user_on_date(self, user_id: int, local_date: date) -> bool:
        """Fails open: a storage error counts as "no report" so reminders keep flowing."""
        try:
            conn = await self._connect()
            try:
                cursor = await conn.execute(
                    "SELECT 1 FROM reports WHERE user_id=? AND report_date=? LIMIT 1",
                    (user_id, local_date.isoformat()),
                )
                row = await cursor.fetchone()
            finally:
                await conn.close()
        except (sqlite3.Error, OSError) as exc:
            LOGGER.warning("Could not check report of user %s for %s: %s", user_id, local_date.isoformat(), exc)
            LOGGER.debug("Report lookup failure", exc_info=True)
            return False
        return row is not None

    async def upsert_account(self, telegram_id: int, role: Role) -> None:
        conn = await self._connect()
        try:
            await conn.execute(
                """
                INSERT INTO accounts (telegram_id, role) VALUES (?, ?)
                ON CONFLICT(telegram_id) DO UPDATE SET
                    role=excluded.role,
                    updated_at=CURRENT_TIMESTAMP
                """,
                (telegram_id, role.value),
            )
            await conn.commit()
        finally:
            await conn.close()

    async def get_role(self, telegram_id: int) -> Optional[Role]:
        conn = await self._connect()
        try:
            cursor = await conn.execute("SELECT role FROM accounts WHERE telegram_id=?", (telegram_id,))
            row = await cursor.fetchone()
        finally:
            await conn.close()
        return Role(row["role"]) if row else None

    async def remove_account(self, telegram_id: int) -> bool:
        conn = await self._connect()
        try:
            cursor = await conn.execute("DELETE FROM accounts WHERE telegram_id=?", (telegram_id,))
            await conn.commit()
            return cursor.rowcount > 0
        finally:
            await conn.close()

    async def list_accounts(self) -> List[Tuple[int, Role]]:
        conn = await self._connect()
        try:
            cursor = await conn.execute("SELECT telegram_id, role FROM accounts ORDER BY id")
            rows = await cursor.fetchall()
        finally:
            await conn.close()
        return [(int(row["telegram_id"]), Role(row["role"])) for row in rows]

    async def list_admin_ids(self) -> List[int]:
        return [telegram_id for telegram_id, role in await self.list_accounts() if role is Role.ADMIN]

    @staticmethod
    def _row_to_report(row: sqlite3.Row) -> DailyReport:
        return DailyReport(
            id=row["id"],
            user_id=row["user_id"],
            user_name=row["user_name"],
            report_date=date.fromisoformat(row["report_date"]),
            hours_worked=row["hours_worked"],
            text=row["report_text"],
            received_at=datetime.fromisoformat(row["received_at"]),
        )
