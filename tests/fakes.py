"""测试替身。"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from helios.config import Config
from helios.errors import AuthError


def make_config(root: str | Path, **overrides: Any) -> Config:
    root = Path(root)
    values: dict[str, Any] = {
        "launcher_dir": root / "launcher",
        "data_dir": root / "data",
        "log_file": root / "logs" / "launcher.log",
    }
    values.update(overrides)
    return Config(**values)


class FakeAuthClient:
    """记录调用的认证客户端。``me`` 只接受 ``valid_tokens`` 里的令牌。"""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self.valid_tokens: set[str] = set()
        self.register_response: dict[str, Any] = {}
        self.login_response: dict[str, Any] = {}
        self.refresh_response: dict[str, Any] = {}
        self.login_error: Exception | None = None
        self.refresh_error: Exception | None = None
        self.logout_error: Exception | None = None
        self.on_me: Callable[[str | None], None] | None = None

    def calls_to(self, name: str) -> list[tuple]:
        return [args for call, args in self.calls if call == name]

    def register(self, username: str, password: str, email: str | None = None) -> dict[str, Any]:
        self.calls.append(("register", (username, password, email)))
        return self.register_response

    def login(self, username: str, password: str, device: str) -> dict[str, Any]:
        self.calls.append(("login", (username, password, device)))
        if self.login_error is not None:
            raise self.login_error
        return self.login_response

    def me(self, access_token: str | None) -> dict[str, Any]:
        self.calls.append(("me", (access_token,)))
        if self.on_me is not None:
            self.on_me(access_token)
        if access_token in self.valid_tokens:
            return {"username": "someone"}
        raise AuthError("token expired", status_code=401)

    def refresh(self, refresh_token: str) -> dict[str, Any]:
        self.calls.append(("refresh", (refresh_token,)))
        if self.refresh_error is not None:
            raise self.refresh_error
        return dict(self.refresh_response)

    def logout(self, refresh_token: str) -> dict[str, Any]:
        self.calls.append(("logout", (refresh_token,)))
        if self.logout_error is not None:
            raise self.logout_error
        return {}
