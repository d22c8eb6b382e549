def test_healthz_reports_database(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


def test_healthz_without_database(unconfigured_client):
    response = unconfigured_client.get("/healthz")
    assert response.json() == {"status": "ok", "database": "not_configured"}


def test_resource_without_database_is_503(unconfigured_client):
    response = unconfigured_client.get("/api/users")
    assert response.status_code == 503
    assert response.json()["code"] == "DATABASE_NOT_CONFIGURED"
