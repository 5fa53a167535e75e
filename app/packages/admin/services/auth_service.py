"""认证服务：校验账号密码并签发访问令牌。"""

from sqlalchemy.orm import Session
from starlette.requests import Request

from app.packages.admin.core.config import get_settings
from app.packages.admin.core.constants import ACCESS_TOKEN_TYPE, HTTP_STATUS_OK, HTTP_STATUS_UNAUTHORIZED
from app.packages.admin.core.exceptions import AppException
from app.packages.admin.core.logger import logger
from app.packages.admin.core.responses import create_response
from app.packages.admin.core.security import create_access_token, store_refreshed_token, verify_password
from app.packages.admin.core.session import create_session
from app.packages.admin.crud.users import user_crud


class AuthService:
    """负责处理登录流程。"""

    def login(self, db: Session, request: Request, *, username: str, password: str) -> dict:
        """校验用户凭证，创建滑动会话并返回访问令牌。"""
        user = user_crud.get_by_username(db, username)
        if user is None or not verify_password(password, user.hashed_password):
            logger.warning("Login failed for user '%s'", username)
            raise AppException(msg="用户名或密码错误", code=HTTP_STATUS_UNAUTHORIZED)

        ttl_seconds = max(get_settings().access_token_expire_minutes, 1) * 60
        session_id = create_session(user.id, ttl_seconds)
        access_token = create_access_token({"user_id": user.id, "username": user.username, "sid": session_id})

        # 签发的令牌同时通过 body.meta 与响应头返回
        store_refreshed_token(request, access_token)
        logger.info("User '%s' logged in", user.username)

        return create_response(
            "登录成功",
            {"access_token": access_token, "token_type": ACCESS_TOKEN_TYPE},
            HTTP_STATUS_OK,
            request=request,
        )


auth_service = AuthService()
