"""设置路由。"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from helios.context import LauncherContext
from helios.web.deps import get_context
from helios.web.errors import ApiError
from helios.web.responses import success_response

router = APIRouter(prefix="/api/settings", tags=["settings"])


class AuthApiPayload(BaseModel):
    url: str = ""


@router.get("/auth-api")
def get_auth_api(ctx: LauncherContext = Depends(get_context)) -> dict:
    return success_response(
        {"url": ctx.settings.get_auth_api(), "default": ctx.settings.get_auth_api(default=True)}
    )


@router.put("/auth-api")
def set_auth_api(payload: AuthApiPayload, ctx: LauncherContext = Depends(get_context)) -> dict:
    url = payload.url.strip()
    if not url.startswith(("http://", "https://")):
        raise ApiError("认证服务地址必须以 http:// 或 https:// 开头", status_code=400)
    with ctx.store.lock:
        ctx.settings.set_auth_api(url)
        ctx.store.save()
    return success_response({"url": ctx.settings.get_auth_api()})
