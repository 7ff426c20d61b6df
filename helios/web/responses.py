"""统一响应结构。"""

from __future__ import annotations

from typing import Any


def success_response(data: Any = None, msg: str = "ok") -> dict[str, Any]:
    return {"code": 0, "msg": msg, "data": data}


def error_response(msg: str, code: int = 1) -> dict[str, Any]:
    return {"code": code, "msg": msg, "data": None}
