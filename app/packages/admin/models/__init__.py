"""模型包初始化，便于统一导入 ORM 实体并触发模型注册。"""

from app.packages.admin.models.dict_data import SysDictData
from app.packages.admin.models.user import User

__all__ = ["SysDictData", "User"]
