def _exercise(client, **overrides):
    body = {"name": "Bench Press", "sets": 4, "reps": 10, "weightLbs": 185}
    body.update(overrides)
    response = client.post("/api/exercises", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def _workout_id(client):
    response = client.post("/api/workouts", json={
        "workoutType": "Strength Training",
        "durationMinutes": 60,
        "date": "2024-01-15",
    })
    return response.json()["id"]


def test_create_and_update(client):
    exercise = _exercise(client)
    assert exercise["weightLbs"] == 185
    assert exercise["workoutId"] is None

    response = client.put(f"/api/exercises/{exercise['id']}", json={"reps": 12, "id": 999, "createdAt": "x"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["reps"] == 12
    assert updated["id"] == exercise["id"]
    assert updated["createdAt"] == exercise["createdAt"]


def test_validation(client):
    assert client.post("/api/exercises", json={}).json()["code"] == "MISSING_NAME"
    assert client.post("/api/exercises", json={"name": " "}).json()["code"] == "MISSING_NAME"
    assert client.post("/api/exercises", json={"name": "Squat", "sets": -1}).json()["code"] == "INVALID_SETS"
    assert client.post("/api/exercises", json={"name": "Squat", "reps": -1}).json()["code"] == "INVALID_REPS"
    assert client.post("/api/exercises", json={"name": "Squat", "weightLbs": -1}).json()["code"] == "INVALID_WEIGHT"

    exercise = _exercise(client)
    response = client.put("/api/exercises", params={"id": exercise["id"]}, json={"name": ""})
    assert response.json()["code"] == "INVALID_NAME"


def test_list_by_workout(client):
    workout_id = _workout_id(client)
    _exercise(client, name="Bench Press", workoutId=workout_id)
    _exercise(client, name="Squats", workoutId=workout_id)
    _exercise(client, name="Burpees")

    names = [e["name"] for e in client.get(f"/api/exercises/workout/{workout_id}").json()]
    assert names == ["Bench Press", "Squats"]

    filtered = client.get("/api/exercises", params={"workoutId": workout_id}).json()
    assert len(filtered) == 2

    found = client.get("/api/exercises", params={"search": "burp"}).json()
    assert [e["name"] for e in found] == ["Burpees"]

    response = client.get("/api/exercises/workout/abc")
    assert response.json()["code"] == "INVALID_WORKOUT_ID"


def test_delete(client):
    exercise = _exercise(client)
    response = client.delete(f"/api/exercises/{exercise['id']}")
    assert response.json() == {"message": "Exercise deleted successfully", "exercise": exercise}

    response = client.get(f"/api/exercises/{exercise['id']}")
    assert response.status_code == 404
    assert response.json()["code"] == "EXERCISE_NOT_FOUND"
