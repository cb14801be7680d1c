from __future__ import annotations

"""Static account roster plus the role table kept in storage."""
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..models.account import Account
from .storage import StorageService

LOGGER = logging.getLogger(__name__)

UNKNOWN_USER_NAME = "(Unknown)"


class AccountRoster:
    """Ordered, read-only list of configured accounts."""

    def __init__(self, accounts: Iterable[Account] = ()) -> None:
        self._accounts: List[Account] = list(accounts)
        self._by_id: Dict[int, Account] = {account.telegram_id: account for account in self._accounts}

    def list_accounts(self) -> List[Account]:
        return list(self._accounts)

    def find(self, telegram_id: int) -> Optional[Account]:
        return self._by_id.get(telegram_id)

    def user_name(self, telegram_id: int) -> str:
        account = self.find(telegram_id)
        if account is None or not account.user_name:
            return UNKNOWN_USER_NAME
        return account.user_name

    def __len__(self) -> int:
        return len(self._accounts)


def load_roster(path: Path) -> AccountRoster:
    """Read accounts from a JSON list; a missing file yields an empty roster."""
    if not path.exists():
        LOGGER.warning("Roster file %s not found, starting with no accounts", path)
        return AccountRoster()
    raw = json.loads(path.read_text(encoding="utf-8"))
    roster = AccountRoster(Account(**entry) for entry in raw)
    LOGGER.info("Loaded %d accounts from %s", len(roster), path)
    return roster


class AccountDirectory:
    def __init__(self, roster: AccountRoster, storage: StorageService) -> None:
        self._roster = roster
        self._storage = storage

    @property
    def roster(self) -> AccountRoster:
        return self._roster

    async def sync_roles(self) -> None:
        for account in self._roster.list_accounts():
            await self._storage.upsert_account(account.telegram_id, account.role)

    async def lookup(self, telegram_id: int) -> Optional[Account]:
        role = await self._storage.get_role(telegram_id)
        if role is None:
            return None
        profile = self._roster.find(telegram_id)
        if profile is None:
            return Account(telegram_id=telegram_id, role=role)
        return profile.model_copy(update={"role": role})
