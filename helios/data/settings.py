"""设置项的读写访问。

所有 getter 支持 ``default=True``，返回结构默认值而不是当前值。
"""

from __future__ import annotations

import os
from typing import Any, Mapping

from helios.data.models import GameSettings, JavaConfig, NewsCache
from helios.data.store import ConfigStore


def _parse_int(value: Any) -> int | None:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


class SettingsAccessor:
    def __init__(self, store: ConfigStore) -> None:
        self.store = store
        self._defaults = store.default_document()

    def _section(self, name: str, default: bool = False) -> dict[str, Any]:
        root = self._defaults if default else self.store.document
        return root["settings"][name]

    # ---- launcher ----

    def get_auth_api(self, default: bool = False) -> str:
        return self._section("launcher", default)["authAPI"]

    def set_auth_api(self, url: Any) -> None:
        self._section("launcher")["authAPI"] = str(url or "").strip()

    def get_data_directory(self, default: bool = False) -> str:
        return self._section("launcher", default)["dataDirectory"]

    def set_data_directory(self, data_directory: str) -> None:
        self._section("launcher")["dataDirectory"] = data_directory

    def get_common_directory(self) -> str:
        return os.path.join(self.get_data_directory(), "common")

    def get_instance_directory(self) -> str:
        return os.path.join(self.get_data_directory(), "instances")

    def get_allow_prerelease(self, default: bool = False) -> bool:
        return self._section("launcher", default)["allowPrerelease"]

    def set_allow_prerelease(self, allow: bool) -> None:
        self._section("launcher")["allowPrerelease"] = bool(allow)

    # ---- game ----

    def get_game_settings(self, default: bool = False) -> GameSettings:
        return GameSettings.from_dict(self._section("game", default))

    def get_game_width(self, default: bool = False) -> int:
        return self._section("game", default)["resWidth"]

    def set_game_width(self, width: Any) -> None:
        self._section("game")["resWidth"] = int(str(width).strip())

    @staticmethod
    def validate_game_width(width: Any) -> bool:
        value = _parse_int(width)
        return value is not None and value >= 0

    def get_game_height(self, default: bool = False) -> int:
        return self._section("game", default)["resHeight"]

    def set_game_height(self, height: Any) -> None:
        self._section("game")["resHeight"] = int(str(height).strip())

    validate_game_height = validate_game_width

    def get_fullscreen(self, default: bool = False) -> bool:
        return self._section("game", default)["fullscreen"]

    def set_fullscreen(self, fullscreen: bool) -> None:
        self._section("game")["fullscreen"] = bool(fullscreen)

    def get_auto_connect(self, default: bool = False) -> bool:
        return self._section("game", default)["autoConnect"]

    def set_auto_connect(self, auto_connect: bool) -> None:
        self._section("game")["autoConnect"] = bool(auto_connect)

    def get_launch_detached(self, default: bool = False) -> bool:
        return self._section("game", default)["launchDetached"]

    def set_launch_detached(self, launch_detached: bool) -> None:
        self._section("game")["launchDetached"] = bool(launch_detached)

    # ---- selection / tokens ----

    def get_selected_server(self, default: bool = False) -> str | None:
        root = self._defaults if default else self.store.document
        return root.get("selectedServerId")

    def set_selected_server(self, server_id: str | None) -> None:
        self.store.document["selectedServerId"] = server_id

    def get_client_token(self) -> str | None:
        return self.store.document.get("clientToken")

    def set_client_token(self, client_token: str | None) -> None:
        self.store.document["clientToken"] = client_token

    # ---- news cache ----

    def get_news_cache(self) -> NewsCache:
        return NewsCache.from_dict(self.store.document.get("newsCache"))

    def set_news_cache(self, news_cache: NewsCache | Mapping[str, Any]) -> None:
        if isinstance(news_cache, NewsCache):
            news_cache = news_cache.to_dict()
        self.store.document["newsCache"] = dict(news_cache)

    def set_news_cache_dismissed(self, dismissed: bool) -> None:
        self.store.document["newsCache"]["dismissed"] = bool(dismissed)

    # ---- mod configurations ----

    def get_mod_configurations(self) -> list[dict[str, Any]]:
        return self.store.document["modConfigurations"]

    def set_mod_configurations(self, configurations: list[dict[str, Any]]) -> None:
        self.store.document["modConfigurations"] = configurations

    def get_mod_configuration(self, server_id: str) -> dict[str, Any] | None:
        for item in self.get_mod_configurations():
            if item.get("id") == server_id:
                return item
        return None

    def set_mod_configuration(self, server_id: str, configuration: dict[str, Any]) -> None:
        configurations = self.get_mod_configurations()
        for index, item in enumerate(configurations):
            if item.get("id") == server_id:
                configurations[index] = configuration
                return
        configurations.append(configuration)

    # ---- java ----

    def ensure_java_config(
        self, server_id: str, suggested_major: int, recommended_ram: int | None = None
    ) -> None:
        java_config = self.store.document["javaConfig"]
        if server_id not in java_config:
            java_config[server_id] = JavaConfig.defaults_for(suggested_major, recommended_ram).to_dict()

    def get_java_config(self, server_id: str) -> JavaConfig | None:
        record = self.store.document["javaConfig"].get(server_id)
        return JavaConfig.from_dict(record) if record is not None else None

    def _java_field(self, server_id: str, key: str) -> Any:
        record = self.store.document["javaConfig"].get(server_id)
        return record.get(key) if record is not None else None

    def _set_java_field(self, server_id: str, key: str, value: Any) -> None:
        self.store.document["javaConfig"][server_id][key] = value

    def get_min_ram(self, server_id: str) -> str | None:
        return self._java_field(server_id, "minRAM")

    def set_min_ram(self, server_id: str, min_ram: str) -> None:
        self._set_java_field(server_id, "minRAM", min_ram)

    def get_max_ram(self, server_id: str) -> str | None:
        return self._java_field(server_id, "maxRAM")

    def set_max_ram(self, server_id: str, max_ram: str) -> None:
        self._set_java_field(server_id, "maxRAM", max_ram)

    def get_java_executable(self, server_id: str) -> str | None:
        return self._java_field(server_id, "executable")

    def set_java_executable(self, server_id: str, executable: str | None) -> None:
        self._set_java_field(server_id, "executable", executable)

    def get_jvm_options(self, server_id: str) -> list[str] | None:
        return self._java_field(server_id, "jvmOptions")

    def set_jvm_options(self, server_id: str, jvm_options: list[str]) -> None:
        self._set_java_field(server_id, "jvmOptions", list(jvm_options))
