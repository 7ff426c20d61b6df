"""启动器本地服务入口。"""

from __future__ import annotations

import logging
import os
import sys

import uvicorn

from helios.config import Config
from helios.context import build_context
from helios.web.app import create_app

logger = logging.getLogger(__name__)


def main() -> int:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    config = Config.from_env()
    try:
        context = build_context(config)
    except OSError as exc:
        logger.exception("初始化失败: %s", exc)
        return 1

    if context.store.is_first_launch():
        logger.info("首次启动，已生成默认配置: %s", context.store.path)
    if context.registry.get_selected() is not None and not context.session.validate_selected():
        logger.info("当前账户需要重新登录")

    app = create_app(context)
    uvicorn.run(app, host=config.host, port=config.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
