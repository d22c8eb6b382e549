def _challenge(client, **overrides):
    body = {
        "title": "10K Steps Daily",
        "description": "Walk 10,000 steps every day for 2 weeks.",
        "daysLeft": 8,
        "reward": "$25 Gift Card",
    }
    body.update(overrides)
    response = client.post("/api/challenges", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_create(client):
    challenge = _challenge(client, participantsCount=400)
    assert challenge["participantsCount"] == 0
    assert challenge["daysLeft"] == 8


def test_create_validation(client):
    assert client.post("/api/challenges", json={"description": "d", "daysLeft": 1}).json()["code"] == "MISSING_TITLE"
    assert client.post("/api/challenges", json={"title": "t", "daysLeft": 1}).json()["code"] == "MISSING_DESCRIPTION"
    assert client.post("/api/challenges", json={"title": "t", "description": "d"}).json()["code"] == "MISSING_DAYS_LEFT"
    response = client.post("/api/challenges", json={"title": "t", "description": "d", "daysLeft": -2})
    assert response.json()["code"] == "INVALID_DAYS_LEFT"


def test_update_validation(client):
    challenge = _challenge(client)
    response = client.put(f"/api/challenges/{challenge['id']}", json={"participantsCount": -1})
    assert response.json()["code"] == "INVALID_PARTICIPANTS_COUNT"

    response = client.put("/api/challenges", params={"id": challenge["id"]}, json={"participantsCount": 424})
    assert response.json()["participantsCount"] == 424


def test_days_left_filter_and_sort(client):
    _challenge(client, title="Plank", daysLeft=12)
    _challenge(client, title="5K", daysLeft=3)
    _challenge(client, title="Pushups", daysLeft=25)

    ending_soon = client.get("/api/challenges", params={"daysLeft": 12, "sort": "daysLeft", "order": "asc"}).json()
    assert [c["title"] for c in ending_soon] == ["5K", "Plank"]

    assert client.get("/api/challenges", params={"daysLeft": "soon"}).json()["code"] == "INVALID_DAYS_LEFT"


def test_delete_challenge(client):
    challenge = _challenge(client)
    body = client.delete(f"/api/challenges/{challenge['id']}").json()
    assert body["message"] == "Challenge deleted successfully"
    assert body["challenge"]["id"] == challenge["id"]
    assert client.get("/api/challenges", params={"id": challenge["id"]}).json()["code"] == "NOT_FOUND"
