"""会话生命周期：注册、登录、校验/刷新、注销。"""

from __future__ import annotations

import logging
import threading
from typing import Any

from helios.auth.client import AuthClient
from helios.auth.identity import derive_id
from helios.data.accounts import AccountRegistry
from helios.data.models import ACCOUNT_KIND_CUSTOM, Account
from helios.data.store import ConfigStore
from helios.errors import AuthError, TransportError, ValidationError

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS = "请输入用户名和密码"


def _require_credentials(username: str | None, password: str | None) -> None:
    if not username or not username.strip() or not password:
        raise ValidationError(MISSING_CREDENTIALS)


class SessionManager:
    """通过认证服务驱动账户会话，并经 AccountRegistry 持久化。"""

    def __init__(
        self,
        store: ConfigStore,
        client: AuthClient,
        registry: AccountRegistry | None = None,
        device_name: str | None = None,
    ) -> None:
        self.store = store
        self.client = client
        self.registry = registry or AccountRegistry(store)
        self.device_name = device_name or store.config.device_name
        self._refresh_locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def register(self, username: str, password: str, email: str | None = None) -> dict[str, Any]:
        _require_credentials(username, password)
        email = email.strip() if email else None
        return self.client.register(username.strip(), password, email or None)

    def login(self, username: str, password: str) -> Account:
        _require_credentials(username, password)
        username = username.strip()
        payload = self.client.login(username, password, self.device_name)

        user = payload.get("user")
        server_name = user.get("username") if isinstance(user, dict) else None
        display_name = server_name.strip() if isinstance(server_name, str) and server_name.strip() else username

        with self.store.lock:
            account = self.registry.upsert(
                derive_id(display_name),
                payload.get("access"),
                payload.get("refresh"),
                display_name,
            )
            self.store.save()
        logger.info("登录成功: %s", display_name)
        return account

    def _lock_for(self, account_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._refresh_locks.get(account_id)
            if lock is None:
                lock = self._refresh_locks[account_id] = threading.Lock()
            return lock

    def validate_selected(self) -> bool:
        """校验当前账户；访问令牌失效时尝试用刷新令牌换新。

        返回 False 表示需要重新登录。
        """
        account = self.registry.get_selected()
        if account is None or account.kind != ACCOUNT_KIND_CUSTOM:
            return False

        try:
            self.client.me(account.access_token)
            return True
        except (AuthError, TransportError) as exc:
            logger.info("访问令牌校验失败: %s", exc)

        if not account.refresh_token:
            logger.info("没有刷新令牌，需要重新登录")
            return False

        with self._lock_for(account.id):
            current = self.registry.get(account.id)
            if current is None or not current.refresh_token:
                return False
            # 等锁期间已被其他调用刷新
            if current.access_token and current.access_token != account.access_token:
                return True
            return self._refresh(current)

    def _refresh(self, account: Account) -> bool:
        try:
            payload = self.client.refresh(account.refresh_token)
        except (AuthError, TransportError) as exc:
            logger.warning("刷新令牌失败: %s", exc)
            return False

        access = payload.get("access")
        if not isinstance(access, str) or not access:
            logger.warning("刷新响应缺少 access 字段")
            return False
        new_refresh = payload.get("refresh")
        with self.store.lock:
            if isinstance(new_refresh, str) and new_refresh:
                self.registry.update_tokens(account.id, access_token=access, refresh_token=new_refresh)
            else:
                self.registry.update_tokens(account.id, access_token=access)
            self.store.save()
        logger.info("访问令牌已刷新: %s", account.display_name)
        return True

    def remove_account(self, account_id: str) -> None:
        account = self.registry.get(account_id)
        if account is not None and account.refresh_token:
            try:
                self.client.logout(account.refresh_token)
            except (AuthError, TransportError) as exc:
                logger.warning("注销请求失败（已忽略）: %s", exc)
        with self.store.lock:
            self.registry.remove(account_id)
            self.store.save()
        with self._locks_guard:
            self._refresh_locks.pop(account_id, None)
