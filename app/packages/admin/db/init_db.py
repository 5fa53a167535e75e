"""Database bootstrapping utilities."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.packages.admin.core.config import get_settings
from app.packages.admin.core.constants import DEFAULT_ADMIN_NICKNAME
from app.packages.admin.core.enums import DictDataStatusEnum, UserStatusEnum
from app.packages.admin.core.security import get_password_hash
from app.packages.admin.db import session as db_session
from app.packages.admin.models.base import Base
from app.packages.admin.models.dict_data import SysDictData
from app.packages.admin.models.user import User

logger = logging.getLogger(__name__)

# 内置的“系统开关”字典，与后台管理端的初始化数据保持一致
DEFAULT_DICT_DATA = (
    {
        "dict_type": "sys_normal_disable",
        "dict_label": "正常",
        "dict_value": str(DictDataStatusEnum.ENABLED.value),
        "dict_sort": 0,
        "list_class": "primary",
        "is_default": "Y",
        "remark": "系统正常",
    },
    {
        "dict_type": "sys_normal_disable",
        "dict_label": "停用",
        "dict_value": str(DictDataStatusEnum.DISABLED.value),
        "dict_sort": 1,
        "list_class": "danger",
        "is_default": "N",
        "remark": "系统停用",
    },
)


def init_db() -> None:
    """Create all database tables if they do not exist and seed baseline data."""
    Base.metadata.create_all(bind=db_session.engine)

    session = db_session.SessionLocal()
    try:
        admin = _seed_admin_user(session)
        _seed_dict_data(session, operator_id=admin.id)
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to seed default data during database initialization")
        raise
    finally:
        session.close()


def _seed_admin_user(db: Session) -> User:
    """Ensure the default administrator account exists."""
    settings = get_settings()
    admin = (
        db.query(User)
        .filter(User.username == settings.default_admin_username, User.is_deleted.is_(False))
        .first()
    )
    if admin is None:
        admin = User(
            username=settings.default_admin_username,
            hashed_password=get_password_hash(settings.default_admin_password),
            nickname=DEFAULT_ADMIN_NICKNAME,
            status=UserStatusEnum.NORMAL.value,
            is_active=True,
        )
        db.add(admin)
        db.flush()
        logger.info("Seeded default administrator '%s'", admin.username)
    return admin


def _seed_dict_data(db: Session, *, operator_id: int) -> None:
    """Seed the built-in dictionary entries once; skipped when the type already has data."""
    seeded_types = {item["dict_type"] for item in DEFAULT_DICT_DATA}
    existing_types = {
        row[0]
        for row in db.query(SysDictData.dict_type)
        .filter(SysDictData.dict_type.in_(seeded_types))
        .distinct()
        .all()
    }
    for item in DEFAULT_DICT_DATA:
        if item["dict_type"] in existing_types:
            continue
        db.add(SysDictData(**item, status=DictDataStatusEnum.ENABLED.value, create_by=operator_id))
    db.flush()
