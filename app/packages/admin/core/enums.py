"""枚举定义：约束用户与字典数据状态的可选值。"""

from enum import Enum, IntEnum


class UserStatusEnum(str, Enum):
    NORMAL = "normal"
    DISABLED = "disabled"


class DictDataStatusEnum(IntEnum):
    """字典数据状态，沿用后台管理端的 1/2 约定。"""

    DISABLED = 1
    ENABLED = 2
