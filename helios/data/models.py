"""数据模型与默认配置结构。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

ACCOUNT_KIND_CUSTOM = "custom"

JAVA8_JVM_OPTIONS = [
    "-XX:+UseConcMarkSweepGC",
    "-XX:+CMSIncrementalMode",
    "-XX:-UseAdaptiveSizePolicy",
    "-Xmn128M",
]
JAVA17_JVM_OPTIONS = [
    "-XX:+UnlockExperimentalVMOptions",
    "-XX:+UseG1GC",
    "-XX:G1NewSizePercent=20",
    "-XX:G1ReservePercent=20",
    "-XX:MaxGCPauseMillis=50",
    "-XX:G1HeapRegionSize=32M",
]
DEFAULT_RAM = "2G"


def _as_mapping(data: Any) -> Mapping[str, Any]:
    return data if isinstance(data, Mapping) else {}


def _read_str(data: Mapping[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return value if isinstance(value, str) else default


def _read_optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) and value else None


def _read_bool(data: Mapping[str, Any], key: str, default: bool = False) -> bool:
    value = data.get(key)
    if isinstance(value, bool):
        return value
    return default


def _read_int(data: Mapping[str, Any], key: str, default: int = 0) -> int:
    value = data.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return int(stripped)
    return default


def _read_list_str(data: Mapping[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


@dataclass
class Account:
    """本地签发的账户记录。"""

    id: str = ""
    display_name: str = ""
    access_token: str | None = None
    refresh_token: str | None = None
    kind: str = ACCOUNT_KIND_CUSTOM

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Account":
        payload = _as_mapping(data)
        return cls(
            id=_read_str(payload, "id", ""),
            display_name=_read_str(payload, "displayName", ""),
            access_token=_read_optional_str(payload, "accessToken"),
            refresh_token=_read_optional_str(payload, "refreshToken"),
            kind=_read_str(payload, "type", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "id": self.id,
            "displayName": self.display_name,
            "accessToken": self.access_token,
            "refreshToken": self.refresh_token,
        }

    def to_public_dict(self) -> dict[str, Any]:
        """不含令牌的视图，用于对外展示。"""

        return {
            "id": self.id,
            "displayName": self.display_name,
            "type": self.kind,
            "hasRefreshToken": self.refresh_token is not None,
        }


@dataclass
class GameSettings:
    """游戏窗口与启动选项。"""

    res_width: int = 1280
    res_height: int = 720
    fullscreen: bool = False
    auto_connect: bool = True
    launch_detached: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "GameSettings":
        payload = _as_mapping(data)
        return cls(
            res_width=_read_int(payload, "resWidth", 1280),
            res_height=_read_int(payload, "resHeight", 720),
            fullscreen=_read_bool(payload, "fullscreen", False),
            auto_connect=_read_bool(payload, "autoConnect", True),
            launch_detached=_read_bool(payload, "launchDetached", True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "resWidth": self.res_width,
            "resHeight": self.res_height,
            "fullscreen": self.fullscreen,
            "autoConnect": self.auto_connect,
            "launchDetached": self.launch_detached,
        }


@dataclass
class LauncherSettings:
    """启动器自身选项。"""

    allow_prerelease: bool = False
    data_directory: str = ""
    auth_api: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "LauncherSettings":
        payload = _as_mapping(data)
        return cls(
            allow_prerelease=_read_bool(payload, "allowPrerelease", False),
            data_directory=_read_str(payload, "dataDirectory", ""),
            auth_api=_read_str(payload, "authAPI", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "allowPrerelease": self.allow_prerelease,
            "dataDirectory": self.data_directory,
            "authAPI": self.auth_api,
        }


@dataclass
class NewsCache:
    """新闻缓存。"""

    date: str | None = None
    content: str | None = None
    dismissed: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "NewsCache":
        payload = _as_mapping(data)
        return cls(
            date=_read_optional_str(payload, "date"),
            content=_read_optional_str(payload, "content"),
            dismissed=_read_bool(payload, "dismissed", False),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "content": self.content,
            "dismissed": self.dismissed,
        }


@dataclass
class JavaConfig:
    """单个服务器的 Java 运行参数。"""

    min_ram: str = DEFAULT_RAM
    max_ram: str = DEFAULT_RAM
    executable: str | None = None
    jvm_options: list[str] = field(default_factory=list)

    @classmethod
    def defaults_for(cls, suggested_major: int, recommended_ram: int | None = None) -> "JavaConfig":
        ram = f"{recommended_ram}M" if recommended_ram else DEFAULT_RAM
        options = JAVA17_JVM_OPTIONS if suggested_major > 8 else JAVA8_JVM_OPTIONS
        return cls(min_ram=ram, max_ram=ram, jvm_options=list(options))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "JavaConfig":
        payload = _as_mapping(data)
        return cls(
            min_ram=_read_str(payload, "minRAM", DEFAULT_RAM),
            max_ram=_read_str(payload, "maxRAM", DEFAULT_RAM),
            executable=_read_optional_str(payload, "executable"),
            jvm_options=_read_list_str(payload, "jvmOptions"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "minRAM": self.min_ram,
            "maxRAM": self.max_ram,
            "executable": self.executable,
            "jvmOptions": list(self.jvm_options),
        }
