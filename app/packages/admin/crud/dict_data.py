"""字典数据的数据库访问方法。"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Query, Session

from app.packages.admin.core.exceptions import RecordNotFoundError
from app.packages.admin.crud.base import CRUDBase, storage_guard
from app.packages.admin.models.dict_data import SysDictData


class CRUDDictData(CRUDBase[SysDictData]):
    """提供字典数据的条件查询、分页与批量软删除能力。"""

    def filtered_query(
        self,
        db: Session,
        *,
        dict_code: Optional[int] = None,
        dict_type: Optional[str] = None,
        dict_label: Optional[str] = None,
        dict_value: Optional[str] = None,
        status: Optional[int] = None,
    ) -> Query:
        """编码、类型、状态精确匹配；显示文本与实际值模糊匹配。"""
        query = self.query(db)
        if dict_code is not None:
            query = query.filter(self.model.dict_code == dict_code)
        if dict_type:
            query = query.filter(self.model.dict_type == dict_type)
        if status is not None:
            query = query.filter(self.model.status == status)
        if dict_label:
            query = query.filter(self.model.dict_label.ilike(f"%{dict_label}%"))
        if dict_value:
            query = query.filter(self.model.dict_value.ilike(f"%{dict_value}%"))
        return query.order_by(self.model.dict_sort.asc(), self.model.dict_code.asc())

    def list_with_filters(
        self,
        db: Session,
        *,
        skip: int,
        limit: int,
        **filters,
    ) -> Tuple[List[SysDictData], int]:
        """返回分页后的字典数据及满足条件的总数。"""
        with storage_guard(db, "page SysDictData"):
            query = self.filtered_query(db, **filters)
            total = query.order_by(None).count()
            items = query.offset(max(skip, 0)).limit(max(limit, 1)).all()
        return items, total

    def list_all(self, db: Session, **filters) -> List[SysDictData]:
        """返回满足条件的全部字典数据，不分页。"""
        with storage_guard(db, "list SysDictData"):
            return self.filtered_query(db, **filters).all()

    def soft_delete_many(
        self,
        db: Session,
        dict_codes: Iterable[int],
        *,
        update_by: int,
    ) -> List[int]:
        """批量软删除并写入删除人；任一编码不存在时整体回滚。"""
        codes = list(dict.fromkeys(dict_codes))
        with storage_guard(db, "delete SysDictData"):
            rows = self.query(db).filter(self.model.dict_code.in_(codes)).all()
            found = {row.dict_code for row in rows}
            missing = [code for code in codes if code not in found]
            if missing:
                db.rollback()
                raise RecordNotFoundError(self.model.__name__, missing[0])
            for row in rows:
                row.update_by = update_by
                row.is_deleted = True
                db.add(row)
            db.commit()
        return codes


dict_data_crud = CRUDDictData(SysDictData, pk_name="dict_code")
