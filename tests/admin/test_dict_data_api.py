"""字典数据管理接口的集成测试。"""

import uuid

from fastapi.testclient import TestClient

from app.packages.admin.models.dict_data import SysDictData
from app.packages.admin.models.user import User

BASE_URL = "/api/v1/dict/data"
OPTION_URL = "/api/v1/dict-data/option-select"


def _unique_type() -> str:
    return f"test_{uuid.uuid4().hex[:8]}"


def _user_id(db, username: str) -> int:
    return db.query(User).filter(User.username == username).one().id


def _insert(client: TestClient, headers: dict, **overrides) -> int:
    body = {
        "dict_label": "高优先级",
        "dict_value": "high",
        "dict_type": "priority_level",
        "dict_sort": 1,
        "status": 2,
        "remark": "立即处理",
    }
    body.update(overrides)
    response = client.post(BASE_URL, headers=headers, json=body)
    assert response.status_code == 200, response.text
    payload = response.json()
    assert payload["code"] == 200
    assert payload["msg"] == "创建成功"
    return payload["data"]


def test_insert_then_get_round_trip(client: TestClient, admin_headers: dict):
    """新增后按编码查询，字段应与写入时一致。"""
    dict_type = _unique_type()
    body = {
        "dict_label": "  低优先级 ",
        "dict_value": "low",
        "dict_type": dict_type,
        "dict_sort": 3,
        "status": 1,
        "css_class": "text-muted",
        "list_class": "info",
        "is_default": "N",
        "default": "",
        "remark": "可延后处理",
    }
    response = client.post(BASE_URL, headers=admin_headers, json=body)
    assert response.status_code == 200
    dict_code = response.json()["data"]
    assert isinstance(dict_code, int)

    get_resp = client.get(f"{BASE_URL}/{dict_code}", headers=admin_headers)
    assert get_resp.status_code == 200
    payload = get_resp.json()
    assert payload["msg"] == "查看成功"
    record = payload["data"]
    assert record["dict_code"] == dict_code
    assert record["dict_label"] == "低优先级"
    assert record["dict_value"] == "low"
    assert record["dict_type"] == dict_type
    assert record["dict_sort"] == 3
    assert record["status"] == 1
    assert record["css_class"] == "text-muted"
    assert record["list_class"] == "info"
    assert record["is_default"] == "N"
    assert record["default"] is None
    assert record["remark"] == "可延后处理"
    assert record["create_time"] is not None


def test_insert_stamps_creator_from_session(client: TestClient, editor_headers: dict, db_session_fixture):
    """请求体中的创建人字段应被忽略，始终写入当前登录用户。"""
    editor_id = _user_id(db_session_fixture, "editor")
    dict_code = _insert(
        client,
        editor_headers,
        dict_type=_unique_type(),
        create_by=999,
        update_by=999,
        dict_code=424242,
    )
    assert dict_code != 424242

    record = client.get(f"{BASE_URL}/{dict_code}", headers=editor_headers).json()["data"]
    assert record["create_by"] == editor_id
    assert record["update_by"] is None


def test_update_and_delete_stamp_updater(
    client: TestClient, admin_headers: dict, editor_headers: dict, db_session_fixture
):
    """更新与删除都应把当前登录用户写入更新人。"""
    admin_id = _user_id(db_session_fixture, "admin")
    editor_id = _user_id(db_session_fixture, "editor")
    dict_type = _unique_type()
    dict_code = _insert(client, admin_headers, dict_type=dict_type)

    update_resp = client.put(
        f"{BASE_URL}/{dict_code}",
        headers=editor_headers,
        json={
            "dict_label": "最高优先级",
            "dict_value": "urgent",
            "dict_type": dict_type,
            "dict_sort": 0,
            "update_by": admin_id,
        },
    )
    assert update_resp.status_code == 200
    assert update_resp.json()["msg"] == "更新成功"
    assert update_resp.json()["data"] == dict_code

    record = client.get(f"{BASE_URL}/{dict_code}", headers=admin_headers).json()["data"]
    assert record["dict_label"] == "最高优先级"
    assert record["dict_value"] == "urgent"
    assert record["create_by"] == admin_id
    assert record["update_by"] == editor_id

    delete_resp = client.delete(f"{BASE_URL}/{dict_code}", headers=admin_headers)
    assert delete_resp.status_code == 200
    assert delete_resp.json()["msg"] == "删除成功"
    assert delete_resp.json()["data"] == dict_code

    db_session_fixture.expire_all()
    stored = db_session_fixture.get(SysDictData, dict_code)
    assert stored.is_deleted is True
    assert stored.update_by == admin_id


def test_get_unknown_code_is_failure(client: TestClient, admin_headers: dict):
    response = client.get(f"{BASE_URL}/987654", headers=admin_headers)

    assert response.status_code == 500
    payload = response.json()
    assert payload["code"] == 500
    assert payload["msg"] == "查询失败"
    assert payload["data"] is None


def test_get_deleted_record_is_failure(client: TestClient, admin_headers: dict):
    dict_code = _insert(client, admin_headers, dict_type=_unique_type())
    assert client.delete(f"{BASE_URL}/{dict_code}", headers=admin_headers).status_code == 200

    response = client.get(f"{BASE_URL}/{dict_code}", headers=admin_headers)
    assert response.status_code == 500
    assert response.json()["msg"] == "查询失败"


def test_update_and_delete_unknown_code_fail(client: TestClient, admin_headers: dict):
    update_resp = client.put(
        f"{BASE_URL}/987654",
        headers=admin_headers,
        json={"dict_label": "x", "dict_value": "x", "dict_type": "x"},
    )
    assert update_resp.status_code == 500
    assert update_resp.json()["msg"] == "更新失败"

    delete_resp = client.delete(f"{BASE_URL}/987654", headers=admin_headers)
    assert delete_resp.status_code == 500
    assert delete_resp.json()["msg"] == "删除失败"


def test_page_respects_page_size_and_count(client: TestClient, admin_headers: dict):
    """分页结果条数不超过 pageSize，总数不少于当前页条数。"""
    dict_type = _unique_type()
    for index in range(5):
        _insert(client, admin_headers, dict_type=dict_type, dict_value=f"v{index}", dict_sort=5 - index)

    first_page = client.get(
        BASE_URL,
        headers=admin_headers,
        params={"dictType": dict_type, "pageIndex": 1, "pageSize": 2},
    )
    assert first_page.status_code == 200
    payload = first_page.json()
    assert payload["msg"] == "查询成功"
    data = payload["data"]
    assert data["count"] == 5
    assert data["page_index"] == 1
    assert data["page_size"] == 2
    assert len(data["list"]) == 2
    # 按 dict_sort 升序
    assert [item["dict_value"] for item in data["list"]] == ["v4", "v3"]

    last_page = client.get(
        BASE_URL,
        headers=admin_headers,
        params={"dictType": dict_type, "pageIndex": 3, "pageSize": 2},
    ).json()["data"]
    assert len(last_page["list"]) == 1
    assert last_page["count"] >= len(last_page["list"])

    for params in ({"pageSize": 1}, {"pageSize": 50}, {"pageIndex": 2, "pageSize": 3}):
        data = client.get(BASE_URL, headers=admin_headers, params=params).json()["data"]
        assert len(data["list"]) <= params["pageSize"]
        assert data["count"] >= len(data["list"])


def test_page_normalizes_out_of_range_parameters(client: TestClient, admin_headers: dict):
    response = client.get(BASE_URL, headers=admin_headers, params={"pageIndex": 0, "pageSize": -5})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["page_index"] == 1
    assert data["page_size"] == 10
    assert len(data["list"]) <= 10

    capped = client.get(BASE_URL, headers=admin_headers, params={"pageSize": 10000}).json()["data"]
    assert capped["page_size"] == 200


def test_page_filters(client: TestClient, admin_headers: dict):
    dict_type = _unique_type()
    enabled_code = _insert(client, admin_headers, dict_type=dict_type, dict_label="启用项", dict_value="on", status=2)
    _insert(client, admin_headers, dict_type=dict_type, dict_label="停用项", dict_value="off", status=1)

    by_status = client.get(
        BASE_URL, headers=admin_headers, params={"dictType": dict_type, "status": 1}
    ).json()["data"]
    assert [item["dict_value"] for item in by_status["list"]] == ["off"]

    by_code = client.get(BASE_URL, headers=admin_headers, params={"dictCode": enabled_code}).json()["data"]
    assert by_code["count"] == 1
    assert by_code["list"][0]["dict_code"] == enabled_code

    by_label = client.get(
        BASE_URL, headers=admin_headers, params={"dictType": dict_type, "dictLabel": "停用"}
    ).json()["data"]
    assert [item["dict_label"] for item in by_label["list"]] == ["停用项"]


def test_option_select_returns_only_requested_type(client: TestClient, admin_headers: dict):
    wanted, other = _unique_type(), _unique_type()
    for index in range(3):
        _insert(client, admin_headers, dict_type=wanted, dict_value=f"w{index}")
    _insert(client, admin_headers, dict_type=other, dict_value="o")
    # 类型前缀相同的其它类型不应被匹配
    _insert(client, admin_headers, dict_type=f"{wanted}_x", dict_value="p")

    response = client.get(OPTION_URL, headers=admin_headers, params={"dictType": wanted})
    assert response.status_code == 200
    payload = response.json()
    assert payload["msg"] == "查询成功"
    items = payload["data"]
    assert len(items) == 3
    assert all(item["dict_type"] == wanted for item in items)


def test_option_select_returns_seeded_dictionary(client: TestClient, admin_headers: dict):
    items = client.get(
        OPTION_URL, headers=admin_headers, params={"dictType": "sys_normal_disable"}
    ).json()["data"]

    assert [(item["dict_label"], item["dict_value"]) for item in items] == [("正常", "2"), ("停用", "1")]


def test_batch_delete_is_all_or_nothing(client: TestClient, admin_headers: dict, db_session_fixture):
    dict_type = _unique_type()
    first = _insert(client, admin_headers, dict_type=dict_type, dict_value="a")
    second = _insert(client, admin_headers, dict_type=dict_type, dict_value="b")

    failed = client.request("DELETE", BASE_URL, headers=admin_headers, json={"ids": [first, 987654]})
    assert failed.status_code == 500
    assert failed.json()["msg"] == "删除失败"
    assert client.get(f"{BASE_URL}/{first}", headers=admin_headers).status_code == 200

    deleted = client.request("DELETE", BASE_URL, headers=admin_headers, json={"ids": [first, second]})
    assert deleted.status_code == 200
    assert deleted.json()["data"] == [first, second]

    remaining = client.get(OPTION_URL, headers=admin_headers, params={"dictType": dict_type}).json()["data"]
    assert remaining == []


def test_binding_failures_return_500(client: TestClient, admin_headers: dict):
    """参数绑定失败在访问存储前短路，统一按 500 返回。"""
    missing_fields = client.post(BASE_URL, headers=admin_headers, json={"dict_label": "缺少类型"})
    assert missing_fields.status_code == 500
    payload = missing_fields.json()
    assert payload["code"] == 500
    assert payload["msg"] == "请求参数验证失败"
    assert payload["data"]

    blank_label = client.post(
        BASE_URL,
        headers=admin_headers,
        json={"dict_label": "   ", "dict_value": "v", "dict_type": "t"},
    )
    assert blank_label.status_code == 500

    bad_path = client.get(f"{BASE_URL}/not-a-number", headers=admin_headers)
    assert bad_path.status_code == 500

    bad_page = client.get(BASE_URL, headers=admin_headers, params={"pageSize": "ten"})
    assert bad_page.status_code == 500

    bad_status = client.get(BASE_URL, headers=admin_headers, params={"status": 7})
    assert bad_status.status_code == 500
    assert bad_status.json()["msg"] == "状态仅支持 1（停用）或 2（正常）"


def test_codes_beyond_integer_range_fail_binding(client: TestClient, admin_headers: dict):
    """超出 Integer 主键范围的编码在绑定阶段失败，不会进入存储层。"""
    huge = "99999999999999999999"

    for response in (
        client.get(f"{BASE_URL}/{huge}", headers=admin_headers),
        client.put(
            f"{BASE_URL}/{huge}",
            headers=admin_headers,
            json={"dict_label": "x", "dict_value": "x", "dict_type": "x"},
        ),
        client.delete(f"{BASE_URL}/{huge}", headers=admin_headers),
        client.get(BASE_URL, headers=admin_headers, params={"dictCode": huge}),
        client.request("DELETE", BASE_URL, headers=admin_headers, json={"ids": [1, int(huge)]}),
    ):
        assert response.status_code == 500
        payload = response.json()
        assert payload["code"] == 500
        assert payload["msg"] == "请求参数验证失败"
