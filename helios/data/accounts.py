"""账户表读写与当前账户选择。"""

from __future__ import annotations

import logging
from typing import Any

from helios.data.models import ACCOUNT_KIND_CUSTOM, Account
from helios.data.store import ConfigStore

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class AccountRegistry:
    """在配置文档的 ``accounts`` 表上做增删改查。

    不变式：``selectedAccountId`` 要么为 None，要么是 ``accounts`` 里的键。
    """

    def __init__(self, store: ConfigStore) -> None:
        self.store = store

    @property
    def _accounts(self) -> dict[str, dict[str, Any]]:
        return self.store.document["accounts"]

    def all(self) -> list[Account]:
        with self.store.lock:
            return [Account.from_dict(record) for record in self._accounts.values()]

    def get(self, account_id: str) -> Account | None:
        with self.store.lock:
            record = self._accounts.get(account_id)
            return Account.from_dict(record) if record is not None else None

    def upsert(
        self,
        account_id: str,
        access_token: str | None,
        refresh_token: str | None,
        display_name: str,
    ) -> Account:
        account = Account(
            id=account_id.strip(),
            display_name=display_name.strip(),
            access_token=access_token or None,
            refresh_token=refresh_token or None,
            kind=ACCOUNT_KIND_CUSTOM,
        )
        with self.store.lock:
            self._accounts[account.id] = account.to_dict()
            self.store.document["selectedAccountId"] = account.id
        logger.info("账户已保存: %s", account.display_name)
        return account

    def update_tokens(
        self,
        account_id: str,
        access_token: str | None = UNSET,
        refresh_token: str | None = UNSET,
    ) -> Account | None:
        with self.store.lock:
            record = self._accounts.get(account_id)
            if record is None:
                return None
            record["type"] = ACCOUNT_KIND_CUSTOM
            if access_token is not UNSET:
                record["accessToken"] = access_token
            if refresh_token is not UNSET:
                record["refreshToken"] = refresh_token
            return Account.from_dict(record)

    def remove(self, account_id: str) -> bool:
        with self.store.lock:
            if self._accounts.pop(account_id, None) is None:
                return False
            self._compact_selection(account_id)
        logger.info("账户已删除: %s", account_id)
        return True

    def _compact_selection(self, removed_id: str) -> None:
        document = self.store.document
        if document.get("selectedAccountId") != removed_id:
            return
        remaining = next(iter(self._accounts), None)
        document["selectedAccountId"] = remaining
        if remaining is None:
            document["clientToken"] = None

    def get_selected_id(self) -> str | None:
        return self.store.document.get("selectedAccountId") or None

    def get_selected(self) -> Account | None:
        with self.store.lock:
            selected_id = self.get_selected_id()
            if selected_id is None:
                return None
            return self.get(selected_id)

    def select(self, account_id: str) -> Account | None:
        with self.store.lock:
            account = self.get(account_id)
            if account is not None:
                self.store.document["selectedAccountId"] = account_id
            return account
