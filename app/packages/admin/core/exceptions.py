"""异常处理模块：定义统一的业务异常、存储异常与响应格式。"""

from typing import Any, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.packages.admin.core.constants import MSG_INTERNAL_ERROR, MSG_VALIDATION_FAILURE
from app.packages.admin.core.logger import logger
from app.packages.admin.core.security import consume_refreshed_token


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data


class BindingError(ValueError):
    """请求参数无法绑定或校验失败，发生在访问存储之前。"""


class StorageError(Exception):
    """持久化层的任何失败，均由 CRUD 层统一包装为该异常。"""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class RecordNotFoundError(StorageError):
    """目标记录不存在或已被软删除。"""

    def __init__(self, model_name: str, identifier: Any) -> None:
        super().__init__(f"{model_name} {identifier} 不存在或已删除")
        self.model_name = model_name
        self.identifier = identifier


def _build_payload(request: Request, msg: Any, data: Any, code: int) -> dict[str, Any]:
    payload = {"msg": msg, "data": data, "code": code}
    token = consume_refreshed_token(request)
    if token:
        payload["meta"] = {"access_token": token}
    return payload


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """将 FastAPI 的 ``HTTPException`` 转换为统一响应格式。"""
    payload = _build_payload(request, exc.detail, getattr(exc, "data", None), exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """兜底处理：将未捕获异常转换为标准的 500 响应结构。"""
    logger.error("Unhandled error for %s %s", request.method, request.url.path, exc_info=exc)
    payload = _build_payload(request, MSG_INTERNAL_ERROR, None, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)


def _serialize_errors(obj: Any) -> Any:
    if isinstance(obj, Exception):
        return str(obj)
    if isinstance(obj, dict):
        return {key: _serialize_errors(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_serialize_errors(item) for item in obj]
    return obj


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """请求体或查询参数绑定失败：不进入存储层，直接按 500 返回。"""
    errors = _serialize_errors(exc.errors())
    logger.error("Request binding failed for %s %s: %s", request.method, request.url.path, errors)
    payload = _build_payload(request, MSG_VALIDATION_FAILURE, errors, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)


async def binding_exception_handler(request: Request, exc: BindingError) -> JSONResponse:
    """依赖中抛出的 ``BindingError`` 与校验失败同样处理。"""
    logger.error("Request binding failed for %s %s: %s", request.method, request.url.path, exc)
    payload = _build_payload(request, str(exc), None, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)
