"""认证路由。"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from helios.context import LauncherContext
from helios.web.deps import get_context
from helios.web.responses import success_response

router = APIRouter(prefix="/api/auth", tags=["auth"])


class RegisterPayload(BaseModel):
    username: str = ""
    password: str = ""
    email: str | None = None


class LoginPayload(BaseModel):
    username: str = ""
    password: str = ""


@router.post("/register")
def register(payload: RegisterPayload, ctx: LauncherContext = Depends(get_context)) -> dict:
    result = ctx.session.register(payload.username, payload.password, payload.email)
    return success_response(result)


@router.post("/login")
def login(payload: LoginPayload, ctx: LauncherContext = Depends(get_context)) -> dict:
    account = ctx.session.login(payload.username, payload.password)
    return success_response(account.to_public_dict())


@router.post("/validate")
def validate(ctx: LauncherContext = Depends(get_context)) -> dict:
    return success_response({"valid": ctx.session.validate_selected()})
