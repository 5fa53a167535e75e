"""用户 CRUD：集中管理用户相关的数据操作。"""

from typing import Optional

from sqlalchemy.orm import Session

from app.packages.admin.crud.base import CRUDBase, storage_guard
from app.packages.admin.models.user import User


class CRUDUser(CRUDBase[User]):
    """封装常用的用户查询方法，供认证流程复用。"""

    def get_by_username(self, db: Session, username: str) -> Optional[User]:
        """根据唯一用户名获取用户实例。"""
        with storage_guard(db, "get User by username"):
            return self.query(db).filter(User.username == username).first()


user_crud = CRUDUser(User)
