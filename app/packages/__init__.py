"""业务包入口：主应用通过这里取得后台管理包暴露的路由、配置与异常处理。"""

from .admin import package

__all__ = ["package"]
