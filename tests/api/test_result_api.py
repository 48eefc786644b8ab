"""API tests for /api/result."""


def test_unset_result_is_empty(client):
    response = client.get("/api/result", params={"type": "day"})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "value": ""}


def test_unknown_type(client):
    response = client.get("/api/result", params={"type": "evening"})

    assert response.status_code == 400
    assert response.json() == {"ok": False}


def test_publish_requires_admin(client):
    response = client.post("/api/result", json={"type": "day", "value": "12-34"})

    assert response.status_code == 401


def test_publish_then_read(admin_client):
    response = admin_client.post("/api/result", json={"type": "night", "value": " 12-34 x"})
    assert response.json() == {"ok": True, "value": "12-34"}

    admin_client.post("/api/result", json={"type": "night", "value": "56-78"})

    assert admin_client.get("/api/result", params={"type": "night"}).json() == {"ok": True, "value": "56-78"}
    assert admin_client.get("/api/result", params={"type": "day"}).json() == {"ok": True, "value": ""}


def test_storage_down_serves_empty_value(offline_client):
    response = offline_client.get("/api/result", params={"type": "day"})

    assert response.json() == {"ok": True, "value": "", "ephemeral": True}
