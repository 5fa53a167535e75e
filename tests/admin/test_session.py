"""滑动会话存储的单元测试。"""

from app.packages.admin.core.session import InMemorySessionBackend


def test_touch_extends_live_session():
    backend = InMemorySessionBackend()
    session_id = backend.create_session(1, ttl_seconds=60)

    assert backend.touch_session(session_id, 1, ttl_seconds=60) is True
    assert backend.touch_session(session_id, 2, ttl_seconds=60) is False


def test_expired_session_is_rejected():
    backend = InMemorySessionBackend()
    session_id = backend.create_session(1, ttl_seconds=-1)

    assert backend.touch_session(session_id, 1, ttl_seconds=60) is False


def test_create_session_purges_expired_entries():
    """创建新会话时清理已过期的会话，内存不会无限增长。"""
    backend = InMemorySessionBackend()
    stale = [backend.create_session(user_id, ttl_seconds=-1) for user_id in range(5)]
    live = backend.create_session(99, ttl_seconds=60)

    assert set(backend._store) == {live}
    assert all(session_id not in backend._store for session_id in stale)
