"""运行时配置（环境变量）。"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

APP_NAME = "Helios Launcher"
DEFAULT_AUTH_API = "http://localhost:5000"
DEFAULT_DEVICE_NAME = "Helios-Launcher"
DEFAULT_REQUEST_TIMEOUT = 15.0
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5151
CONFIG_FILE_NAME = "config.json"


def _system_root(env: Mapping[str, str]) -> Path:
    appdata = env.get("APPDATA")
    if appdata:
        return Path(appdata)
    home = Path(env.get("HOME") or Path.home())
    if sys.platform == "darwin":
        return home / "Library" / "Application Support"
    return home


def default_data_dir(env: Mapping[str, str]) -> Path:
    return _system_root(env) / ".helioslauncher"


def default_launcher_dir(env: Mapping[str, str]) -> Path:
    appdata = env.get("APPDATA")
    if appdata:
        return Path(appdata) / APP_NAME
    if sys.platform == "darwin":
        return _system_root(env) / APP_NAME
    xdg = env.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path(env.get("HOME") or Path.home()) / ".config"
    return base / APP_NAME


def _read_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _read_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "").strip()
    return int(raw) if raw.isdigit() else default


@dataclass(frozen=True)
class Config:
    """启动器运行时配置。"""

    launcher_dir: Path
    data_dir: Path
    auth_api: str = DEFAULT_AUTH_API
    device_name: str = DEFAULT_DEVICE_NAME
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_file: Path | None = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @property
    def config_path(self) -> Path:
        return self.launcher_dir / CONFIG_FILE_NAME

    @property
    def legacy_config_path(self) -> Path:
        return self.data_dir / CONFIG_FILE_NAME

    @property
    def resolved_log_file(self) -> Path:
        return self.log_file or self.launcher_dir / "logs" / "launcher.log"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Config":
        env = os.environ if env is None else env
        launcher_dir = env.get("HELIOS_LAUNCHER_DIR")
        data_dir = env.get("HELIOS_DATA_DIR")
        log_file = env.get("HELIOS_LOG_FILE")
        return cls(
            launcher_dir=Path(launcher_dir) if launcher_dir else default_launcher_dir(env),
            data_dir=Path(data_dir) if data_dir else default_data_dir(env),
            auth_api=(env.get("HELIOS_AUTH_API") or DEFAULT_AUTH_API).strip(),
            device_name=(env.get("HELIOS_DEVICE") or DEFAULT_DEVICE_NAME).strip(),
            request_timeout=_read_float(env, "HELIOS_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            log_file=Path(log_file) if log_file else None,
            host=(env.get("HELIOS_HOST") or DEFAULT_HOST).strip(),
            port=_read_int(env, "HELIOS_PORT", DEFAULT_PORT),
        )
