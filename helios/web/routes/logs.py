"""日志路由。"""

from fastapi import APIRouter, Query

from helios.web.logs import MAX_LOG_LINES, log_buffer
from helios.web.responses import success_response

router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.get("")
def list_logs(limit: int = Query(200, ge=1, le=MAX_LOG_LINES)) -> dict:
    return success_response(log_buffer.tail(limit))
