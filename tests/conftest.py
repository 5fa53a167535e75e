"""测试夹具：为 pytest 提供数据库与客户端的共享配置。"""

import os
from typing import Generator

TEST_DB_PATH = os.path.join(os.path.dirname(__file__), "test.db")
TEST_DATABASE_URL = f"sqlite:///{TEST_DB_PATH}"

# 必须在导入应用模块之前设置，避免创建 PostgreSQL 引擎
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from app.main import app  # noqa: E402
from app.packages.admin.core import session as session_store  # noqa: E402
from app.packages.admin.core.dependencies import get_db  # noqa: E402
from app.packages.admin.core.security import get_password_hash  # noqa: E402
from app.packages.admin.db import session as db_session  # noqa: E402
from app.packages.admin.db.init_db import init_db  # noqa: E402
from app.packages.admin.models.base import Base  # noqa: E402
from app.packages.admin.models.user import User  # noqa: E402

EDITOR_USERNAME = "editor"
EDITOR_PASSWORD = "editor123"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database() -> Generator[None, None, None]:
    """创建隔离的 SQLite 测试数据库，并在会话结束后清理。"""
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db_session.engine = engine
    db_session.SessionLocal = TestingSessionLocal
    session_store.set_backend(session_store.InMemorySessionBackend())

    Base.metadata.create_all(bind=engine)
    init_db()
    _seed_editor()
    yield

    session_store.set_backend(None)
    engine.dispose()
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


def _seed_editor() -> None:
    """额外创建一个非管理员账号，用于校验操作人写入。"""
    with db_session.SessionLocal() as session:
        session.add(
            User(
                username=EDITOR_USERNAME,
                hashed_password=get_password_hash(EDITOR_PASSWORD),
                nickname="编辑",
                is_active=True,
            )
        )
        session.commit()


@pytest.fixture()
def db_session_fixture() -> Generator[Session, None, None]:
    """提供给测试用例使用的数据库会话。"""
    session = db_session.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db_session_fixture):
    """构建 FastAPI TestClient，并注入测试专用的数据库依赖。"""

    def override_get_db() -> Generator[Session, None, None]:
        session = db_session.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def login(client: TestClient, username: str = "admin", password: str = "admin123") -> dict:
    """登录并返回带 Bearer 令牌的请求头。"""
    response = client.post("/api/v1/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    token = response.json()["data"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(client: TestClient) -> dict:
    return login(client)


@pytest.fixture()
def editor_headers(client: TestClient) -> dict:
    return login(client, EDITOR_USERNAME, EDITOR_PASSWORD)
