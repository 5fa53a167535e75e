"""字典数据服务：在请求对象与 CRUD 层之间完成一次存储操作。

每个方法只做一次读写，失败时抛出 ``StorageError``（含其子类
``RecordNotFoundError``），由路由层统一转换为响应。
"""

from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.packages.admin.api.v1.schemas.dict_data import (
    DictDataBatchLookup,
    DictDataControl,
    DictDataLookup,
    DictDataSearch,
)
from app.packages.admin.core.exceptions import BindingError
from app.packages.admin.core.timezone import format_datetime
from app.packages.admin.crud.dict_data import dict_data_crud
from app.packages.admin.models.dict_data import SysDictData


class DictDataService:
    """封装字典数据的分页、查询、增删改逻辑。"""

    def get_page(self, db: Session, search: DictDataSearch) -> Dict[str, Any]:
        """按条件分页查询，返回列表、总数与规范化后的分页参数。"""
        page_index = search.get_page_index()
        page_size = search.get_page_size()
        items, total = dict_data_crud.list_with_filters(
            db,
            skip=search.get_offset(),
            limit=page_size,
            **search.filters(),
        )
        return {
            "list": [self._serialize(item) for item in items],
            "count": total,
            "page_index": page_index,
            "page_size": page_size,
        }

    def get(self, db: Session, lookup: DictDataLookup) -> Dict[str, Any]:
        """按编码获取单条字典数据，不存在时抛出 ``RecordNotFoundError``。"""
        return self._serialize(dict_data_crud.get_or_raise(db, lookup.get_id()))

    def insert(self, db: Session, control: DictDataControl) -> int:
        """新增字典数据，创建人取自 ``control.create_by``。"""
        if control.create_by is None:
            raise BindingError("创建人未设置")
        created = dict_data_crud.create(
            db,
            {**control.to_columns(), "create_by": control.create_by},
        )
        control.set_id(created.dict_code)
        return created.dict_code

    def update(self, db: Session, control: DictDataControl) -> int:
        """更新既有字典数据，更新人取自 ``control.update_by``。"""
        if control.get_id() is None or control.update_by is None:
            raise BindingError("字典编码或更新人未设置")
        record = dict_data_crud.get_or_raise(db, control.get_id())
        for column, value in control.to_columns().items():
            setattr(record, column, value)
        record.update_by = control.update_by
        dict_data_crud.save(db, record)
        return record.dict_code

    def remove(self, db: Session, lookup: DictDataLookup | DictDataBatchLookup) -> List[int]:
        """软删除一条或多条字典数据并写入删除人，全部成功或全部回滚。"""
        if lookup.update_by is None:
            raise BindingError("删除人未设置")
        codes = lookup.get_id()
        if isinstance(codes, int):
            codes = [codes]
        return dict_data_crud.soft_delete_many(db, codes, update_by=lookup.update_by)

    def get_all(self, db: Session, search: DictDataSearch) -> List[Dict[str, Any]]:
        """不分页地返回全部匹配记录，供前端下拉选项使用。"""
        return [self._serialize(item) for item in dict_data_crud.list_all(db, **search.filters())]

    def _serialize(self, item: SysDictData) -> Dict[str, Any]:
        return {
            "dict_code": item.dict_code,
            "dict_sort": item.dict_sort,
            "dict_label": item.dict_label,
            "dict_value": item.dict_value,
            "dict_type": item.dict_type,
            "css_class": item.css_class,
            "list_class": item.list_class,
            "is_default": item.is_default,
            "status": item.status,
            "default": item.default,
            "remark": item.remark,
            "create_by": item.create_by,
            "update_by": item.update_by,
            "create_time": format_datetime(item.create_time),
            "update_time": format_datetime(item.update_time),
        }


dict_data_service = DictDataService()
