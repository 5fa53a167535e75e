"""CRUD 基类：为各实体提供通用的数据访问方法。"""

from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.packages.admin.core.exceptions import RecordNotFoundError, StorageError
from app.packages.admin.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


@contextmanager
def storage_guard(db: Session, action: str) -> Iterator[None]:
    """将 SQLAlchemy 抛出的异常统一转换为 ``StorageError``，并回滚当前事务。"""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError(f"{action} failed: {exc}", cause=exc) from exc


class CRUDBase(Generic[ModelType]):
    """封装常见的查询、创建与保存逻辑，减少重复代码。"""

    def __init__(self, model: Type[ModelType], *, pk_name: str = "id"):
        self.model = model
        self.pk_name = pk_name

    @property
    def pk(self):
        return getattr(self.model, self.pk_name)

    # 统一构造带软删除过滤的查询
    def query(self, db: Session, *, include_deleted: bool = False) -> Query:
        query = db.query(self.model)
        if hasattr(self.model, "is_deleted") and not include_deleted:
            query = query.filter(self.model.is_deleted.is_(False))
        return query

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        with storage_guard(db, f"get {self.model.__name__}"):
            return self.query(db).filter(self.pk == id).first()

    def get_or_raise(self, db: Session, id: Any) -> ModelType:
        """按主键查询，记录不存在时抛出 ``RecordNotFoundError``。"""
        db_obj = self.get(db, id)
        if db_obj is None:
            raise RecordNotFoundError(self.model.__name__, id)
        return db_obj

    def create(self, db: Session, obj_in: Dict[str, Any], *, auto_commit: bool = True) -> ModelType:
        db_obj = self.model(**obj_in)
        with storage_guard(db, f"create {self.model.__name__}"):
            db.add(db_obj)
            if auto_commit:
                db.commit()
                db.refresh(db_obj)
            else:
                db.flush()
        return db_obj

    def save(self, db: Session, db_obj: ModelType, *, auto_commit: bool = True) -> ModelType:
        with storage_guard(db, f"save {self.model.__name__}"):
            db.add(db_obj)
            if auto_commit:
                db.commit()
                db.refresh(db_obj)
            else:
                db.flush()
        return db_obj

