"""字典数据模型：按 ``dict_type`` 分组的键值选项，供前端下拉框等场景使用。"""

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.admin.core.enums import DictDataStatusEnum
from app.packages.admin.models.base import Base, ControlByMixin, SoftDeleteMixin, TimestampMixin


class SysDictData(ControlByMixin, TimestampMixin, SoftDeleteMixin, Base):
    """单条字典数据，``dict_code`` 为全局唯一标识。"""

    __tablename__ = "sys_dict_data"

    dict_code: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dict_sort: Mapped[int] = mapped_column(Integer, default=0)
    dict_label: Mapped[str] = mapped_column(String(128))
    dict_value: Mapped[str] = mapped_column(String(255))
    dict_type: Mapped[str] = mapped_column(String(64), index=True)
    css_class: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    list_class: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    is_default: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    status: Mapped[int] = mapped_column(Integer, default=DictDataStatusEnum.ENABLED.value)
    default: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    remark: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
