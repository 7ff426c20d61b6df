"""认证：HTTP 客户端、身份推导与会话管理。"""

from .client import AuthClient
from .identity import derive_id
from .session import SessionManager

__all__ = ["AuthClient", "SessionManager", "derive_id"]
