"""认证服务 HTTP 客户端。"""

from __future__ import annotations

import logging
from typing import Any, Callable

import requests

from helios.errors import AuthError, TransportError

logger = logging.getLogger(__name__)


class AuthClient:
    """封装 /api/auth/* 接口。

    ``base_url`` 可以是字符串，也可以是返回字符串的函数（每次请求时读取，
    以便设置里修改的地址立即生效）。
    """

    def __init__(
        self,
        base_url: str | Callable[[], str],
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        value = self._base_url() if callable(self._base_url) else self._base_url
        return str(value or "").rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        token: str | None = None,
    ) -> dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            response = self.session.request(
                method,
                self._url(path),
                json=body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("请求认证服务失败 %s %s: %s", method, path, exc)
            raise TransportError(str(exc)) from exc

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        if not response.ok:
            message = data.get("error")
            if not isinstance(message, str) or not message:
                message = f"HTTP {response.status_code}"
            raise AuthError(message, status_code=response.status_code)
        return data

    def register(self, username: str, password: str, email: str | None = None) -> dict[str, Any]:
        return self._request(
            "POST", "/api/auth/register", {"username": username, "password": password, "email": email}
        )

    def login(self, username: str, password: str, device: str) -> dict[str, Any]:
        return self._request(
            "POST", "/api/auth/login", {"username": username, "password": password, "device": device}
        )

    def me(self, access_token: str | None) -> dict[str, Any]:
        return self._request("GET", "/api/auth/me", token=access_token)

    def refresh(self, refresh_token: str) -> dict[str, Any]:
        return self._request("POST", "/api/auth/refresh", {"refresh": refresh_token})

    def logout(self, refresh_token: str) -> dict[str, Any]:
        return self._request("POST", "/api/auth/logout", {"refresh": refresh_token})
