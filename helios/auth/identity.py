"""离线身份 ID 推导。"""

from __future__ import annotations

import hashlib

OFFLINE_PREFIX = "OfflinePlayer:"


def derive_id(name: str) -> str:
    """由显示名推导稳定的 UUID 形式 ID（md5("OfflinePlayer:" + name)），区分大小写。"""

    digest = hashlib.md5(f"{OFFLINE_PREFIX}{name}".encode("utf-8")).hexdigest()
    return f"{digest[:8]}-{digest[8:12]}-{digest[12:16]}-{digest[16:20]}-{digest[20:]}"
