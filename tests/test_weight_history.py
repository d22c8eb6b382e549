import pytest


@pytest.fixture
def user(make_user):
    return make_user()


def _record(client, user_id, date, weight=150.0):
    response = client.post("/api/weight-history", json={"userId": user_id, "weightLbs": weight, "recordedDate": date})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.parametrize("body, code", [
    ({"recordedDate": "2024-11-01"}, "MISSING_WEIGHT"),
    ({"weightLbs": 0, "recordedDate": "2024-11-01"}, "INVALID_WEIGHT"),
    ({"weightLbs": "heavy", "recordedDate": "2024-11-01"}, "INVALID_WEIGHT"),
    ({"weightLbs": 150}, "MISSING_DATE"),
    ({"weightLbs": 150, "recordedDate": " "}, "MISSING_DATE"),
])
def test_create_validation(client, body, code):
    response = client.post("/api/weight-history", json=body)
    assert response.status_code == 400
    assert response.json()["code"] == code


def test_date_range(client, user):
    for date in ("2024-10-01", "2024-10-08", "2024-10-15", "2024-10-22"):
        _record(client, user["id"], date)

    in_range = client.get("/api/weight-history", params={
        "userId": user["id"], "startDate": "2024-10-08", "endDate": "2024-10-15",
    }).json()
    assert [r["recordedDate"] for r in in_range] == ["2024-10-15", "2024-10-08"]

    user_range = client.get(f"/api/weight-history/user/{user['id']}", params={"startDate": "2024-10-15"}).json()
    assert [r["recordedDate"] for r in user_range] == ["2024-10-22", "2024-10-15"]


def test_user_route_validates_dates(client, user):
    response = client.get(f"/api/weight-history/user/{user['id']}", params={"startDate": "last week"})
    assert response.json()["code"] == "INVALID_START_DATE"
    response = client.get(f"/api/weight-history/user/{user['id']}", params={"endDate": "2024-13-45"})
    assert response.json()["code"] == "INVALID_END_DATE"


def test_update_rules(client, user):
    record = _record(client, user["id"], "2024-10-01")

    response = client.put("/api/weight-history", params={"id": record["id"]}, json={})
    assert response.json()["code"] == "NO_UPDATES"

    response = client.put(f"/api/weight-history/{record['id']}", json={"userId": 2})
    assert response.json()["code"] == "USER_ID_NOT_ALLOWED"

    response = client.put(f"/api/weight-history/{record['id']}", json={"weightLbs": 148.5})
    assert response.status_code == 200
    assert response.json()["weightLbs"] == 148.5
    assert response.json()["recordedDate"] == "2024-10-01"


def test_delete_record(client, user):
    record = _record(client, user["id"], "2024-10-01")
    body = client.delete(f"/api/weight-history/{record['id']}").json()
    assert body["message"] == "Weight record deleted successfully"
    assert body["record"]["id"] == record["id"]
    assert client.get(f"/api/weight-history/{record['id']}").json()["code"] == "RECORD_NOT_FOUND"


def test_order_asc_on_both_list_routes(client, user):
    _record(client, user["id"], "2024-10-08")
    _record(client, user["id"], "2024-10-01")

    listed = client.get("/api/weight-history", params={"userId": user["id"], "sort": "recordedDate", "order": "asc"}).json()
    assert [r["recordedDate"] for r in listed] == ["2024-10-01", "2024-10-08"]

    per_user = client.get(f"/api/weight-history/user/{user['id']}", params={"order": "asc"}).json()
    assert [r["recordedDate"] for r in per_user] == ["2024-10-01", "2024-10-08"]

    newest_first = client.get(f"/api/weight-history/user/{user['id']}").json()
    assert [r["recordedDate"] for r in newest_first] == ["2024-10-08", "2024-10-01"]
