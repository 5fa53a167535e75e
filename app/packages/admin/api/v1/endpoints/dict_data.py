"""字典数据管理路由：绑定请求对象、调用服务并输出统一响应。

所有失败（参数绑定或存储异常）都会先写日志，再以 HTTP 500 返回对应操作的提示文案。
"""

from __future__ import annotations

from typing import NoReturn, Optional

from fastapi import APIRouter, Depends, Path, Query, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.packages.admin.api.v1.schemas.dict_data import (
    DictDataBatchLookup,
    DictDataControl,
    DictDataIdResponse,
    DictDataIdsResponse,
    DictDataItemResponse,
    DictDataListResponse,
    DictDataLookup,
    DictDataPageResponse,
    DictDataSearch,
)
from app.packages.admin.core.constants import (
    DEFAULT_PAGE_INDEX,
    DEFAULT_PAGE_SIZE,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    MAX_DICT_CODE,
    MSG_CREATE_FAILURE,
    MSG_CREATE_SUCCESS,
    MSG_DELETE_FAILURE,
    MSG_DELETE_SUCCESS,
    MSG_QUERY_FAILURE,
    MSG_QUERY_SUCCESS,
    MSG_UPDATE_FAILURE,
    MSG_UPDATE_SUCCESS,
    MSG_VIEW_SUCCESS,
)
from app.packages.admin.core.dependencies import get_current_active_user, get_db
from app.packages.admin.core.exceptions import AppException, BindingError, StorageError
from app.packages.admin.core.logger import logger
from app.packages.admin.core.responses import create_response
from app.packages.admin.models.user import User
from app.packages.admin.services.dict_data_service import dict_data_service

router = APIRouter(prefix="/dict/data", tags=["dict_data"])
option_router = APIRouter(prefix="/dict-data", tags=["dict_data"])


def get_dict_data_search(
    status: Optional[int] = Query(None, description="状态：1=停用，2=正常"),
    dict_code: Optional[int] = Query(None, alias="dictCode", ge=1, le=MAX_DICT_CODE, description="字典编码"),
    dict_type: Optional[str] = Query(None, alias="dictType", description="字典类型，精确匹配"),
    dict_label: Optional[str] = Query(None, alias="dictLabel", description="显示文本，模糊匹配"),
    dict_value: Optional[str] = Query(None, alias="dictValue", description="实际值，模糊匹配"),
    page_index: int = Query(DEFAULT_PAGE_INDEX, alias="pageIndex", description="页码"),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize", description="页条数"),
) -> DictDataSearch:
    """将查询参数绑定为 ``DictDataSearch``。"""
    try:
        return DictDataSearch(
            status=status,
            dict_code=dict_code,
            dict_type=dict_type,
            dict_label=dict_label,
            dict_value=dict_value,
            page_index=page_index,
            page_size=page_size,
        )
    except ValidationError as exc:
        raise BindingError(_first_error(exc)) from exc


def get_dict_data_lookup(
    dict_code: int = Path(..., ge=1, le=MAX_DICT_CODE, description="字典编码"),
) -> DictDataLookup:
    return DictDataLookup(dict_code=dict_code)


@router.get("", response_model=DictDataPageResponse)
def get_dict_data_page(
    request: Request,
    search: DictDataSearch = Depends(get_dict_data_search),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> DictDataPageResponse:
    """字典数据分页列表。"""
    try:
        payload = dict_data_service.get_page(db, search)
    except (BindingError, StorageError) as exc:
        _fail(MSG_QUERY_FAILURE, "GetPage", exc)
    return create_response(MSG_QUERY_SUCCESS, payload, request=request)


@router.get("/{dict_code}", response_model=DictDataItemResponse)
def get_dict_data(
    request: Request,
    lookup: DictDataLookup = Depends(get_dict_data_lookup),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> DictDataItemResponse:
    """通过编码获取字典数据，编码不存在时按查询失败处理。"""
    try:
        payload = dict_data_service.get(db, lookup)
    except (BindingError, StorageError) as exc:
        _fail(MSG_QUERY_FAILURE, "Get", exc, warn=True)
    return create_response(MSG_VIEW_SUCCESS, payload, request=request)


@router.post("", response_model=DictDataIdResponse)
def insert_dict_data(
    request: Request,
    control: DictDataControl,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> DictDataIdResponse:
    """添加字典数据，创建人固定为当前登录用户。"""
    control.set_create_by(current_user.id)
    try:
        dict_code = dict_data_service.insert(db, control)
    except (BindingError, StorageError) as exc:
        _fail(MSG_CREATE_FAILURE, "Insert", exc)
    return create_response(MSG_CREATE_SUCCESS, dict_code, request=request)


@router.put("/{dict_code}", response_model=DictDataIdResponse)
def update_dict_data(
    request: Request,
    control: DictDataControl,
    lookup: DictDataLookup = Depends(get_dict_data_lookup),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> DictDataIdResponse:
    """修改字典数据，更新人固定为当前登录用户。"""
    control.set_id(lookup.get_id())
    control.set_update_by(current_user.id)
    try:
        dict_code = dict_data_service.update(db, control)
    except (BindingError, StorageError) as exc:
        _fail(MSG_UPDATE_FAILURE, "Update", exc)
    return create_response(MSG_UPDATE_SUCCESS, dict_code, request=request)


@router.delete("/{dict_code}", response_model=DictDataIdResponse)
def delete_dict_data(
    request: Request,
    lookup: DictDataLookup = Depends(get_dict_data_lookup),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> DictDataIdResponse:
    """删除单条字典数据，删除人固定为当前登录用户。"""
    lookup.set_update_by(current_user.id)
    try:
        dict_data_service.remove(db, lookup)
    except (BindingError, StorageError) as exc:
        _fail(MSG_DELETE_FAILURE, "Remove", exc)
    return create_response(MSG_DELETE_SUCCESS, lookup.get_id(), request=request)


@router.delete("", response_model=DictDataIdsResponse)
def batch_delete_dict_data(
    request: Request,
    lookup: DictDataBatchLookup,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> DictDataIdsResponse:
    """批量删除字典数据，任一编码不存在时整体失败。"""
    lookup.set_update_by(current_user.id)
    try:
        deleted = dict_data_service.remove(db, lookup)
    except (BindingError, StorageError) as exc:
        _fail(MSG_DELETE_FAILURE, "Remove", exc)
    return create_response(MSG_DELETE_SUCCESS, deleted, request=request)


@option_router.get("/option-select", response_model=DictDataListResponse)
def get_dict_data_all(
    request: Request,
    search: DictDataSearch = Depends(get_dict_data_search),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> DictDataListResponse:
    """按字典类型获取全部数据，业务页面填充下拉选项使用。"""
    try:
        payload = dict_data_service.get_all(db, search)
    except (BindingError, StorageError) as exc:
        _fail(MSG_QUERY_FAILURE, "GetAll", exc)
    return create_response(MSG_QUERY_SUCCESS, payload, request=request)


def _fail(msg: str, action: str, exc: Exception, *, warn: bool = False) -> NoReturn:
    """记录日志并抛出 500 业务异常。"""
    log = logger.warning if warn else logger.error
    log("%s error, %s", action, exc)
    raise AppException(msg, HTTP_STATUS_INTERNAL_SERVER_ERROR) from exc


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    # 自定义校验器抛出的 ValueError 保留原始文案，不带 "Value error, " 前缀
    cause = (errors[0].get("ctx") or {}).get("error")
    if isinstance(cause, Exception):
        return str(cause)
    return str(errors[0].get("msg", exc))
