"""路由依赖。"""

from fastapi import Request

from helios.context import LauncherContext


def get_context(request: Request) -> LauncherContext:
    return request.app.state.context
