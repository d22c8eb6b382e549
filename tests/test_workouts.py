"""Workout endpoints, including the owner-scoped item routes."""
import pytest


@pytest.fixture
def owner(make_user):
    return make_user(name="Sarah Johnson", email="sarah.j@fitness.com")


def _workout(client, user_id, **overrides):
    body = {
        "userId": user_id,
        "workoutType": "Running",
        "durationMinutes": 30,
        "caloriesBurned": 300,
        "date": "2024-01-15",
        "notes": "Easy pace",
    }
    body.update(overrides)
    response = client.post("/api/workouts", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_fetch(client, owner):
    workout = _workout(client, owner["id"])
    assert workout["workoutType"] == "Running"
    assert workout["userId"] == owner["id"]
    assert client.get("/api/workouts", params={"id": workout["id"]}).json() == workout


@pytest.mark.parametrize("body, code", [
    ({"durationMinutes": 30, "date": "2024-01-15"}, "MISSING_WORKOUT_TYPE"),
    ({"workoutType": "Yoga", "date": "2024-01-15"}, "MISSING_DURATION"),
    ({"workoutType": "Yoga", "durationMinutes": 30}, "MISSING_DATE"),
    ({"workoutType": "Yoga", "durationMinutes": 0, "date": "2024-01-15"}, "INVALID_DURATION"),
    ({"workoutType": "Yoga", "durationMinutes": "long", "date": "2024-01-15"}, "INVALID_DURATION"),
    ({"workoutType": "Yoga", "durationMinutes": 30, "date": "2024-01-15", "caloriesBurned": -5}, "INVALID_CALORIES"),
    ({"workoutType": "Yoga", "durationMinutes": 30, "date": "2024-01-15", "userId": 0}, "INVALID_USER_ID"),
    ({"workoutType": "   ", "durationMinutes": 30, "date": "2024-01-15"}, "MISSING_WORKOUT_TYPE"),
])
def test_create_validation(client, body, code):
    response = client.post("/api/workouts", json=body)
    assert response.status_code == 400
    assert response.json()["code"] == code


def test_list_filters_and_sorts_by_date(client, owner, make_user):
    other = make_user(name="Mike Chen", email="mike.chen@gym.com")
    _workout(client, owner["id"], date="2024-01-10")
    _workout(client, owner["id"], date="2024-01-20", workoutType="Cycling", notes=None)
    _workout(client, other["id"], date="2024-01-15")

    dates = [w["date"] for w in client.get("/api/workouts", params={"userId": owner["id"]}).json()]
    assert dates == ["2024-01-20", "2024-01-10"]

    found = client.get("/api/workouts", params={"search": "cycl"}).json()
    assert [w["workoutType"] for w in found] == ["Cycling"]

    ascending = client.get(f"/api/workouts/user/{owner['id']}", params={"order": "asc"}).json()
    assert [w["date"] for w in ascending] == ["2024-01-10", "2024-01-20"]


def test_collection_update_and_delete(client, owner):
    workout = _workout(client, owner["id"])
    response = client.put("/api/workouts", params={"id": workout["id"]}, json={"notes": "  Tempo run  "})
    assert response.status_code == 200
    assert response.json()["notes"] == "Tempo run"
    assert response.json()["durationMinutes"] == 30

    response = client.delete("/api/workouts", params={"id": workout["id"]})
    assert response.json()["message"] == "Workout deleted successfully"
    assert response.json()["workout"]["id"] == workout["id"]

    missing = client.get("/api/workouts", params={"id": workout["id"]})
    assert missing.status_code == 404
    assert missing.json()["code"] == "NOT_FOUND"


def test_item_routes_require_auth(client, owner):
    workout = _workout(client, owner["id"])
    response = client.get(f"/api/workouts/{workout['id']}")
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_item_routes_unknown_email(client, owner, bearer):
    workout = _workout(client, owner["id"])
    response = client.get(f"/api/workouts/{workout['id']}", headers=bearer("nobody@fitness.com"))
    assert response.status_code == 401


def test_item_routes_are_owner_scoped(client, owner, make_user, bearer):
    other = make_user(name="Mike Chen", email="mike.chen@gym.com")
    mine = _workout(client, owner["id"])
    theirs = _workout(client, other["id"])
    headers = bearer(owner["email"])

    assert client.get(f"/api/workouts/{mine['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/workouts/{theirs['id']}", headers=headers).status_code == 404
    assert client.delete(f"/api/workouts/{theirs['id']}", headers=headers).status_code == 404


def test_item_update_rejects_user_id(client, owner, bearer):
    workout = _workout(client, owner["id"])
    headers = bearer(owner["email"])

    response = client.put(f"/api/workouts/{workout['id']}", headers=headers, json={"userId": 99})
    assert response.status_code == 400
    assert response.json()["code"] == "USER_ID_NOT_ALLOWED"

    response = client.put(f"/api/workouts/{workout['id']}", headers=headers, json={"caloriesBurned": 450})
    assert response.status_code == 200
    assert response.json()["caloriesBurned"] == 450


def test_deleting_user_orphans_workouts(client, owner):
    workout = _workout(client, owner["id"])
    client.delete(f"/api/users/{owner['id']}")
    orphan = client.get("/api/workouts", params={"id": workout["id"]}).json()
    assert orphan["userId"] is None
