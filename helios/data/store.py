"""配置文档持久化。"""

from __future__ import annotations

import copy
import json
import logging
import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Any, Mapping

from helios.config import Config
from helios.data.schema import Schema, SchemaMigrator, build_document_schema
from helios.errors import ConfigCorruptError

logger = logging.getLogger(__name__)


def _repair_types(default: Mapping[str, Any], document: dict, prefix: str = "") -> list[str]:
    """把结构类型不符的字段（默认值为对象/列表而实际不是）重置为默认值。"""

    repaired = []
    for key, default_value in default.items():
        if key not in document:
            continue
        path = f"{prefix}{key}"
        current = document[key]
        if isinstance(default_value, Mapping):
            if not isinstance(current, dict):
                document[key] = copy.deepcopy(default_value)
                repaired.append(path)
            else:
                repaired.extend(_repair_types(default_value, current, f"{path}."))
        elif isinstance(default_value, list) and not isinstance(current, list):
            document[key] = copy.deepcopy(default_value)
            repaired.append(path)
    return repaired


class ConfigStore:
    """持有唯一的配置文档，负责加载、迁移与原子写入。

    ``document`` 在 ``load()`` 之后可用，其余组件直接在其上原地修改，
    修改后由调用方显式 ``save()``。跨线程修改文档需持有 ``lock``
    （可重入，``save()`` 序列化时同样持有）。
    """

    def __init__(self, config: Config, schema: Schema | None = None) -> None:
        self.config = config
        self.path: Path = config.config_path
        self.legacy_path: Path = config.legacy_config_path
        self.schema = schema or build_document_schema(str(config.data_dir), config.auth_api)
        self.migrator = SchemaMigrator(self.schema)
        self._document: dict[str, Any] | None = None
        self.lock = threading.RLock()
        self._first_launch = not self.path.exists() and not self.legacy_path.exists()

    @property
    def document(self) -> dict[str, Any]:
        if self._document is None:
            raise RuntimeError("配置尚未加载")
        return self._document

    def is_loaded(self) -> bool:
        return self._document is not None

    def is_first_launch(self) -> bool:
        return self._first_launch

    def default_document(self) -> dict[str, Any]:
        return self.schema.build_default()

    def load(self) -> dict[str, Any]:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.legacy_path.exists():
                logger.info("迁移旧版配置文件: %s -> %s", self.legacy_path, self.path)
                shutil.move(str(self.legacy_path), str(self.path))
            else:
                self._document = self.default_document()
                self.save()
                logger.info("配置加载成功（已生成默认配置）")
                return self._document

        try:
            loaded = self._read()
        except ConfigCorruptError:
            logger.exception("配置文件解析失败: %s", self.path)
            logger.info("配置文件格式错误或已损坏")
            logger.info("正在生成新的配置文件")
            self._document = self.default_document()
            self.save()
        else:
            default = self.default_document()
            document = self.migrator.reconcile(default, loaded)
            for path in _repair_types(default, document):
                logger.warning("配置字段类型错误，已恢复默认值: %s", path)
            self.migrator.apply_patches(document, default)
            self._document = document
            self.save()
        logger.info("配置加载成功")
        return self._document

    def _read(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ConfigCorruptError(str(exc)) from exc
        if not isinstance(data, dict):
            raise ConfigCorruptError(f"顶层结构不是对象: {type(data).__name__}")
        return data

    def save(self, document: dict[str, Any] | None = None) -> None:
        with self.lock:
            if document is not None:
                self._document = document
            payload = json.dumps(self.document, ensure_ascii=False, indent=4)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
