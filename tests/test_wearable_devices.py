def _device(client, **overrides):
    body = {"deviceName": "Apple Watch Series 9", "deviceType": "smartwatch"}
    body.update(overrides)
    response = client.post("/api/wearable-devices", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_defaults_to_connected(client):
    device = _device(client, lastSync="2024-11-20T10:00:00.000Z")
    assert device["status"] == "connected"
    assert device["lastSync"] == "2024-11-20T10:00:00.000Z"


def test_create_requires_name_and_type(client):
    assert client.post("/api/wearable-devices", json={"deviceType": "app"}).json()["code"] == "MISSING_DEVICE_NAME"
    response = client.post("/api/wearable-devices", json={"deviceName": "Strava", "deviceType": ""})
    assert response.json()["code"] == "MISSING_DEVICE_TYPE"


def test_sync_and_disconnect_through_item_put(client):
    device = _device(client)
    response = client.put(f"/api/wearable-devices/{device['id']}", json={
        "status": "disconnected",
        "lastSync": "2024-11-21T08:00:00.000Z",
    })
    assert response.status_code == 200
    assert response.json()["status"] == "disconnected"
    assert response.json()["deviceName"] == device["deviceName"]

    response = client.put(f"/api/wearable-devices/{device['id']}", json={"userId": 3})
    assert response.json()["code"] == "USER_ID_NOT_ALLOWED"


def test_user_devices_by_status(client, make_user):
    user = make_user()
    _device(client, userId=user["id"])
    offline = _device(client, userId=user["id"], deviceName="Oura Ring Gen 3", deviceType="sleep tracker")
    client.put("/api/wearable-devices", params={"id": offline["id"]}, json={"status": "disconnected"})

    everything = client.get(f"/api/wearable-devices/user/{user['id']}").json()
    assert len(everything) == 2

    disconnected = client.get(f"/api/wearable-devices/user/{user['id']}", params={"status": "disconnected"}).json()
    assert [d["deviceName"] for d in disconnected] == ["Oura Ring Gen 3"]


def test_delete_device(client):
    device = _device(client)
    body = client.delete(f"/api/wearable-devices/{device['id']}").json()
    assert body["device"]["id"] == device["id"]
    response = client.delete(f"/api/wearable-devices/{device['id']}")
    assert response.status_code == 404
    assert response.json()["code"] == "DEVICE_NOT_FOUND"
