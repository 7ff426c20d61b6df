"""组装核心组件。"""

from __future__ import annotations

from dataclasses import dataclass

from helios.auth.client import AuthClient
from helios.auth.session import SessionManager
from helios.config import Config
from helios.data.accounts import AccountRegistry
from helios.data.settings import SettingsAccessor
from helios.data.store import ConfigStore


@dataclass
class LauncherContext:
    config: Config
    store: ConfigStore
    registry: AccountRegistry
    settings: SettingsAccessor
    session: SessionManager


def build_context(config: Config, client: AuthClient | None = None) -> LauncherContext:
    """加载配置文档并把同一个 store 注入各组件。"""

    store = ConfigStore(config)
    store.load()
    settings = SettingsAccessor(store)
    registry = AccountRegistry(store)
    if client is None:
        client = AuthClient(settings.get_auth_api, timeout=config.request_timeout)
    session = SessionManager(store, client, registry=registry)
    return LauncherContext(
        config=config,
        store=store,
        registry=registry,
        settings=settings,
        session=session,
    )
