"""API 路由汇总。"""

from .accounts import router as accounts_router
from .auth import router as auth_router
from .logs import router as logs_router
from .settings import router as settings_router

__all__ = [
    "accounts_router",
    "auth_router",
    "logs_router",
    "settings_router",
]
