"""字典数据相关的请求对象（查询条件、主键、写入体）与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

from app.packages.admin.api.v1.schemas.common import ResponseEnvelope
from app.packages.admin.core.constants import (
    DEFAULT_PAGE_INDEX,
    DEFAULT_PAGE_SIZE,
    MAX_DICT_CODE,
    MAX_PAGE_SIZE,
)
from app.packages.admin.core.enums import DictDataStatusEnum


# ---------------------------------------------------------------------------
# 请求对象
# ---------------------------------------------------------------------------


class DictDataSearch(BaseModel):
    """列表查询条件，由查询参数逐请求构造。"""

    status: Optional[int] = None
    dict_code: Optional[int] = Field(default=None, ge=1, le=MAX_DICT_CODE)
    dict_type: Optional[str] = None
    dict_label: Optional[str] = None
    dict_value: Optional[str] = None
    page_index: int = DEFAULT_PAGE_INDEX
    page_size: int = DEFAULT_PAGE_SIZE

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value not in {item.value for item in DictDataStatusEnum}:
            raise ValueError("状态仅支持 1（停用）或 2（正常）")
        return value

    @model_validator(mode="after")
    def _normalize_texts(self) -> "DictDataSearch":
        for name in ("dict_type", "dict_label", "dict_value"):
            value = getattr(self, name)
            if value is not None:
                setattr(self, name, value.strip() or None)
        return self

    def get_page_index(self) -> int:
        return self.page_index if self.page_index > 0 else DEFAULT_PAGE_INDEX

    def get_page_size(self) -> int:
        if self.page_size <= 0:
            return DEFAULT_PAGE_SIZE
        return min(self.page_size, MAX_PAGE_SIZE)

    def get_offset(self) -> int:
        return (self.get_page_index() - 1) * self.get_page_size()

    def filters(self) -> dict:
        """转换为 CRUD 层的过滤参数。"""
        return {
            "dict_code": self.dict_code,
            "dict_type": self.dict_type,
            "dict_label": self.dict_label,
            "dict_value": self.dict_value,
            "status": self.status,
        }


class DictDataLookup(BaseModel):
    """按编码定位单条字典数据。删除时由服务端补充操作人。"""

    dict_code: int = Field(..., ge=1, le=MAX_DICT_CODE)
    _update_by: Optional[int] = PrivateAttr(default=None)

    def set_update_by(self, user_id: int) -> None:
        self._update_by = user_id

    @property
    def update_by(self) -> Optional[int]:
        return self._update_by

    def get_id(self) -> int:
        return self.dict_code


class DictDataBatchLookup(BaseModel):
    """批量删除的请求体。"""

    ids: List[int] = Field(..., min_length=1, description="待删除的字典编码")
    _update_by: Optional[int] = PrivateAttr(default=None)

    @model_validator(mode="after")
    def _check_ids(self) -> "DictDataBatchLookup":
        if any(not 1 <= code <= MAX_DICT_CODE for code in self.ids):
            raise ValueError(f"字典编码必须在 1 到 {MAX_DICT_CODE} 之间")
        return self

    def set_update_by(self, user_id: int) -> None:
        self._update_by = user_id

    @property
    def update_by(self) -> Optional[int]:
        return self._update_by

    def get_id(self) -> List[int]:
        return list(self.ids)


class DictDataControl(BaseModel):
    """新增与修改共用的写入体。

    ``dict_code`` 与操作人字段不接受客户端传值：编码来自路径或数据库自增，
    ``create_by``/``update_by`` 由服务端依据当前登录用户写入。
    """

    dict_label: str = Field(..., min_length=1, max_length=128, description="显示文本")
    dict_value: str = Field(..., min_length=1, max_length=255, description="实际值")
    dict_type: str = Field(..., min_length=1, max_length=64, description="所属字典类型")
    dict_sort: int = Field(default=0, ge=0, description="排序值，越小越靠前")
    status: DictDataStatusEnum = Field(default=DictDataStatusEnum.ENABLED, description="1=停用，2=正常")
    css_class: Optional[str] = Field(default=None, max_length=128)
    list_class: Optional[str] = Field(default=None, max_length=128)
    is_default: Optional[str] = Field(default=None, max_length=8)
    default: Optional[str] = Field(default=None, max_length=8)
    remark: Optional[str] = Field(default=None, max_length=255)

    _dict_code: Optional[int] = PrivateAttr(default=None)
    _create_by: Optional[int] = PrivateAttr(default=None)
    _update_by: Optional[int] = PrivateAttr(default=None)

    @model_validator(mode="after")
    def _normalize_texts(self) -> "DictDataControl":
        self.dict_label = self.dict_label.strip()
        self.dict_value = self.dict_value.strip()
        self.dict_type = self.dict_type.strip()
        if not self.dict_label:
            raise ValueError("显示文本不能为空")
        if not self.dict_value:
            raise ValueError("实际值不能为空")
        if not self.dict_type:
            raise ValueError("字典类型不能为空")
        for name in ("css_class", "list_class", "is_default", "default", "remark"):
            value = getattr(self, name)
            if value is not None:
                setattr(self, name, value.strip() or None)
        return self

    def set_id(self, dict_code: int) -> None:
        self._dict_code = dict_code

    def get_id(self) -> Optional[int]:
        return self._dict_code

    def set_create_by(self, user_id: int) -> None:
        self._create_by = user_id

    def set_update_by(self, user_id: int) -> None:
        self._update_by = user_id

    @property
    def create_by(self) -> Optional[int]:
        return self._create_by

    @property
    def update_by(self) -> Optional[int]:
        return self._update_by

    def to_columns(self) -> dict:
        """返回可直接写入模型的字段（不含编码与操作人）。"""
        columns = self.model_dump()
        columns["status"] = int(self.status)
        return columns


# ---------------------------------------------------------------------------
# 响应模型
# ---------------------------------------------------------------------------


class DictDataItem(BaseModel):
    """单条字典数据的结构。"""

    dict_code: int
    dict_sort: int
    dict_label: str
    dict_value: str
    dict_type: str
    css_class: Optional[str]
    list_class: Optional[str]
    is_default: Optional[str]
    status: int
    default: Optional[str]
    remark: Optional[str]
    create_by: Optional[int]
    update_by: Optional[int]
    create_time: Optional[str]
    update_time: Optional[str]


class DictDataPagePayload(BaseModel):
    """字典数据分页列表。"""

    list: List[DictDataItem]
    count: int
    page_index: int
    page_size: int


DictDataPageResponse = ResponseEnvelope[DictDataPagePayload]
DictDataItemResponse = ResponseEnvelope[DictDataItem]
DictDataListResponse = ResponseEnvelope[List[DictDataItem]]
DictDataIdResponse = ResponseEnvelope[int]
DictDataIdsResponse = ResponseEnvelope[List[int]]
