"""常量定义：集中维护状态码、认证类型以及业务提示文案。"""

HTTP_STATUS_OK = 200
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500

ACCESS_TOKEN_TYPE = "bearer"

DEFAULT_ADMIN_NICKNAME = "超级管理员"

# 字典数据分页参数的兜底值
DEFAULT_PAGE_INDEX = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 200

# 字典编码为 Integer 主键，超出该范围的编码在绑定阶段即被拒绝
MAX_DICT_CODE = 2_147_483_647

# 字典数据接口的提示文案
MSG_QUERY_SUCCESS = "查询成功"
MSG_QUERY_FAILURE = "查询失败"
MSG_VIEW_SUCCESS = "查看成功"
MSG_CREATE_SUCCESS = "创建成功"
MSG_CREATE_FAILURE = "创建失败"
MSG_UPDATE_SUCCESS = "更新成功"
MSG_UPDATE_FAILURE = "更新失败"
MSG_DELETE_SUCCESS = "删除成功"
MSG_DELETE_FAILURE = "删除失败"
MSG_VALIDATION_FAILURE = "请求参数验证失败"
MSG_INTERNAL_ERROR = "服务器内部错误"
