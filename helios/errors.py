"""核心异常类型。"""

from __future__ import annotations


class HeliosError(Exception):
    """所有核心异常的基类。"""


class ValidationError(HeliosError):
    """必填参数缺失或为空（在发起网络请求之前检查）。"""


class AuthError(HeliosError):
    """认证服务返回非 2xx 响应。"""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(HeliosError):
    """网络或连接失败。"""


class ConfigCorruptError(HeliosError):
    """配置文件无法解析。由 ConfigStore.load 内部恢复，不向外抛出。"""


class UnknownAccountError(HeliosError):
    """引用了不存在的账户 ID。"""

    def __init__(self, account_id: str) -> None:
        super().__init__(f"账户不存在: {account_id}")
        self.account_id = account_id
