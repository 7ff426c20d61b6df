"""FastAPI 应用入口。"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from helios.context import LauncherContext
from helios.errors import AuthError, TransportError, UnknownAccountError, ValidationError
from helios.web.errors import ApiError
from helios.web.logs import install_log_handlers
from helios.web.responses import error_response
from helios.web.routes import (
    accounts_router,
    auth_router,
    logs_router,
    settings_router,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_response(message, code=1))


def create_app(context: LauncherContext) -> FastAPI:
    install_log_handlers(context.config.resolved_log_file)
    app = FastAPI(title="Helios Launcher API")
    app.state.context = context

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return _error(exc.status_code, exc.message)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        status = exc.status_code if exc.status_code and 400 <= exc.status_code < 500 else 401
        return _error(status, exc.message)

    @app.exception_handler(TransportError)
    async def transport_error_handler(request: Request, exc: TransportError) -> JSONResponse:
        return _error(502, "无法连接认证服务")

    @app.exception_handler(UnknownAccountError)
    async def unknown_account_handler(request: Request, exc: UnknownAccountError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception: %s", exc)
        return _error(500, "系统异常")

    app.include_router(accounts_router)
    app.include_router(auth_router)
    app.include_router(settings_router)
    app.include_router(logs_router)
    return app
