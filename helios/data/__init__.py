"""数据层：配置文档、账户表与设置项。"""

from .accounts import UNSET, AccountRegistry
from .models import (
    ACCOUNT_KIND_CUSTOM,
    Account,
    GameSettings,
    JavaConfig,
    LauncherSettings,
    NewsCache,
)
from .schema import Field, Schema, SchemaMigrator, build_document_schema
from .settings import SettingsAccessor
from .store import ConfigStore

__all__ = [
    "ACCOUNT_KIND_CUSTOM",
    "UNSET",
    "Account",
    "AccountRegistry",
    "ConfigStore",
    "Field",
    "GameSettings",
    "JavaConfig",
    "LauncherSettings",
    "NewsCache",
    "Schema",
    "SchemaMigrator",
    "SettingsAccessor",
    "build_document_schema",
]
