"""配置文档结构声明与增量迁移。

结构由 ``Schema`` 声明，每个字段带有合并标记：

* 普通字段：缺失时补默认值；默认值为对象时逐字段递归补齐。
* ``opaque`` 字段：只保证顶层存在，从不递归，内部结构由调用方维护。

迁移只做加法：不会删除文档里多出来的字段，也不会覆盖已存在的值。
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from helios.data.models import GameSettings, LauncherSettings, NewsCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Field:
    default: Any = None
    opaque: bool = False


@dataclass(frozen=True)
class Schema:
    fields: Mapping[str, Field] = field(default_factory=dict)

    @classmethod
    def from_defaults(cls, defaults: Mapping[str, Any]) -> "Schema":
        return cls({key: Field(value) for key, value in defaults.items()})

    def build_default(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, spec in self.fields.items():
            if isinstance(spec.default, Schema):
                result[key] = spec.default.build_default()
            else:
                result[key] = copy.deepcopy(spec.default)
        return result

    def is_opaque(self, key: str) -> bool:
        spec = self.fields.get(key)
        return spec is not None and spec.opaque

    def child(self, key: str) -> "Schema | None":
        spec = self.fields.get(key)
        if spec is not None and isinstance(spec.default, Schema):
            return spec.default
        return None


CompatPatch = Callable[[dict, Mapping[str, Any]], bool]


def _patch_auth_api_endpoint(document: dict, default: Mapping[str, Any]) -> bool:
    settings = document.get("settings")
    launcher = settings.get("launcher") if isinstance(settings, dict) else None
    if not isinstance(launcher, dict):
        return False
    if launcher.get("authAPI"):
        return False
    launcher["authAPI"] = default["settings"]["launcher"]["authAPI"]
    return True


COMPAT_PATCHES: list[tuple[str, CompatPatch]] = [
    ("auth_api_endpoint", _patch_auth_api_endpoint),
]


class SchemaMigrator:
    """按 Schema 标记把旧文档补齐到当前结构。"""

    def __init__(self, schema: Schema, patches: list[tuple[str, CompatPatch]] | None = None) -> None:
        self.schema = schema
        self.patches = COMPAT_PATCHES if patches is None else patches

    def reconcile(self, default: Mapping[str, Any], loaded: dict) -> dict:
        return self._reconcile(self.schema, default, loaded)

    def _reconcile(self, schema: Schema | None, default: Mapping[str, Any], loaded: dict) -> dict:
        for key, default_value in default.items():
            if key not in loaded:
                loaded[key] = copy.deepcopy(default_value)
                continue
            if schema is not None and schema.is_opaque(key):
                continue
            current = loaded[key]
            if isinstance(default_value, Mapping) and isinstance(current, dict):
                child = schema.child(key) if schema is not None else None
                loaded[key] = self._reconcile(child, default_value, current)
        return loaded

    def apply_patches(self, document: dict, default: Mapping[str, Any]) -> list[str]:
        applied = []
        for name, patch in self.patches:
            if patch(document, default):
                logger.info("已应用兼容补丁: %s", name)
                applied.append(name)
        return applied


def build_document_schema(data_directory: str, auth_api: str) -> Schema:
    launcher = LauncherSettings(data_directory=data_directory, auth_api=auth_api)
    settings = Schema(
        {
            "game": Field(Schema.from_defaults(GameSettings().to_dict())),
            "launcher": Field(Schema.from_defaults(launcher.to_dict())),
        }
    )
    return Schema(
        {
            "settings": Field(settings),
            # 沿用旧版启动器文档的新闻缓存，会话流程不使用，仅供 SettingsAccessor 读写
            "newsCache": Field(Schema.from_defaults(NewsCache().to_dict())),
            "clientToken": Field(None),
            "selectedServerId": Field(None),
            "selectedAccountId": Field(None),
            "accounts": Field({}, opaque=True),
            "modConfigurations": Field([]),
            "javaConfig": Field({}, opaque=True),
        }
    )
