"""账户路由。"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from helios.context import LauncherContext
from helios.errors import UnknownAccountError
from helios.web.deps import get_context
from helios.web.responses import success_response

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


class SelectPayload(BaseModel):
    id: str


@router.get("")
def list_accounts(ctx: LauncherContext = Depends(get_context)) -> dict:
    accounts = [account.to_public_dict() for account in ctx.registry.all()]
    return success_response({"accounts": accounts, "selected": ctx.registry.get_selected_id()})


@router.get("/selected")
def get_selected(ctx: LauncherContext = Depends(get_context)) -> dict:
    account = ctx.registry.get_selected()
    return success_response(account.to_public_dict() if account else None)


@router.put("/selected")
def select_account(payload: SelectPayload, ctx: LauncherContext = Depends(get_context)) -> dict:
    with ctx.store.lock:
        account = ctx.registry.select(payload.id)
        if account is None:
            raise UnknownAccountError(payload.id)
        ctx.store.save()
    return success_response(account.to_public_dict())


@router.delete("/{account_id}")
def delete_account(account_id: str, ctx: LauncherContext = Depends(get_context)) -> dict:
    if ctx.registry.get(account_id) is None:
        raise UnknownAccountError(account_id)
    ctx.session.remove_account(account_id)
    return success_response({"selected": ctx.registry.get_selected_id()})
