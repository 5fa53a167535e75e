"""响应封装：构建系统统一的返回结构。"""

from typing import Any, Optional

from starlette.requests import Request

from app.packages.admin.core.constants import HTTP_STATUS_OK
from app.packages.admin.core.security import consume_refreshed_token


def create_response(
    msg: str,
    data: Any = None,
    code: int = HTTP_STATUS_OK,
    *,
    request: Optional[Request] = None,
) -> dict[str, Any]:
    """按照 ``msg``、``data``、``code`` 组合出统一响应体。

    传入 ``request`` 且本次请求刷新过令牌时，额外附带 ``meta.access_token``。
    """
    payload: dict[str, Any] = {"msg": msg, "data": data, "code": code}
    refreshed_token = consume_refreshed_token(request)
    if refreshed_token:
        payload["meta"] = {"access_token": refreshed_token}
    return payload
