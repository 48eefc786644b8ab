"""API tests for /api/chart.

Tests cover:
- Reading (lazy creation, validation, no-store header, ephemeral fallback)
- Admin-only cell edits and their error mapping
"""

import pytest

from jaimetro.charts.weeks import build_year_rows


def _cell_body(**overrides) -> dict:
    body = {"year": 2025, "type": "day", "weekIndex": 0, "dayIndex": 6, "value": "42"}
    body.update(overrides)
    return body


class TestGetChart:
    def test_creates_full_year(self, client):
        response = client.get("/api/chart", params={"year": "2025", "type": "day"})

        assert response.status_code == 200
        payload = response.json()
        assert payload["ok"] is True
        assert "ephemeral" not in payload
        assert payload["data"]["year"] == 2025
        assert payload["data"]["type"] == "day"
        assert payload["data"]["weeks"] == build_year_rows(2025)

    def test_no_store_header(self, client):
        response = client.get("/api/chart", params={"year": "2025", "type": "night"})

        assert "no-store" in response.headers["cache-control"]

    def test_type_is_case_insensitive(self, client):
        response = client.get("/api/chart", params={"year": "2025", "type": "NIGHT"})

        assert response.status_code == 200
        assert response.json()["data"]["type"] == "night"

    @pytest.mark.parametrize(
        "params",
        [
            {"year": "2025"},
            {"type": "day"},
            {"year": "abc", "type": "day"},
            {"year": "0", "type": "day"},
            {"year": "10000", "type": "day"},
            {"year": "2025", "type": "evening"},
        ],
    )
    def test_invalid_year_or_type(self, client, params: dict):
        response = client.get("/api/chart", params=params)

        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Invalid year/type"}

    def test_last_supported_year(self, client):
        response = client.get("/api/chart", params={"year": "9999", "type": "day"})

        assert response.status_code == 200
        assert response.json()["data"]["weeks"][-1]["range"] == "9999-12-27 to 9999-12-31"

    def test_storage_down_serves_ephemeral_chart(self, offline_client):
        response = offline_client.get("/api/chart", params={"year": "2025", "type": "day"})

        assert response.status_code == 200
        payload = response.json()
        assert payload["ok"] is True
        assert payload["ephemeral"] is True
        assert payload["data"]["weeks"] == build_year_rows(2025)


class TestPatchCell:
    def test_requires_admin(self, client):
        client.get("/api/chart", params={"year": "2025", "type": "day"})

        response = client.patch("/api/chart/cell", json=_cell_body())

        assert response.status_code == 401
        assert response.json() == {"ok": False, "error": "Unauthorized"}

    def test_patch_then_read_back(self, admin_client):
        before = admin_client.get("/api/chart", params={"year": "2025", "type": "day"}).json()["data"]["weeks"]

        response = admin_client.patch("/api/chart/cell", json=_cell_body())
        assert response.status_code == 200
        assert response.json() == {"ok": True, "value": "42"}

        after = admin_client.get("/api/chart", params={"year": "2025", "type": "day"}).json()["data"]["weeks"]
        assert after[0]["days"][6] == "42"
        before[0]["days"][6] = "42"
        assert after == before

    def test_panel_value_is_stored_verbatim(self, admin_client):
        admin_client.get("/api/chart", params={"year": "2025", "type": "day"})

        response = admin_client.patch("/api/chart/cell", json=_cell_body(value="12|34\n5|67|8\n90|1"))

        assert response.json()["value"] == "12|34\n5|67|8\n90|1"

    def test_value_is_sanitized(self, admin_client):
        admin_client.get("/api/chart", params={"year": "2025", "type": "day"})

        response = admin_client.patch("/api/chart/cell", json=_cell_body(value="4x2"))

        assert response.json()["value"] == "42"

    def test_chart_must_exist(self, admin_client):
        response = admin_client.patch("/api/chart/cell", json=_cell_body(year=2031))

        assert response.status_code == 404
        assert response.json() == {"ok": False, "error": "Chart not found"}

    def test_week_index_past_end(self, admin_client):
        admin_client.get("/api/chart", params={"year": "2025", "type": "day"})

        response = admin_client.patch("/api/chart/cell", json=_cell_body(weekIndex=53))

        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Bad indexes"}

    @pytest.mark.parametrize(
        "overrides",
        [{"dayIndex": 7}, {"weekIndex": -1}, {"year": "2025"}, {"type": "evening"}, {"value": 42}],
    )
    def test_bad_payload(self, admin_client, overrides: dict):
        response = admin_client.patch("/api/chart/cell", json=_cell_body(**overrides))

        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Bad payload"}

    def test_storage_down_reports_failure(self, test_settings, offline_client):
        offline_client.post("/api/login", json={"username": test_settings.admin_user, "password": test_settings.admin_pass})

        response = offline_client.patch("/api/chart/cell", json=_cell_body())

        assert response.status_code == 500
        assert response.json()["ok"] is False


class TestDeleteCell:
    def test_clears_cell(self, admin_client):
        admin_client.get("/api/chart", params={"year": "2025", "type": "day"})
        admin_client.patch("/api/chart/cell", json=_cell_body(weekIndex=2, dayIndex=3, value="11"))

        response = admin_client.delete(
            "/api/chart/cell", params={"year": 2025, "type": "day", "weekIndex": 2, "dayIndex": 3}
        )

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        weeks = admin_client.get("/api/chart", params={"year": "2025", "type": "day"}).json()["data"]["weeks"]
        assert weeks[2]["days"][3] == ""

    def test_requires_admin(self, client):
        response = client.delete("/api/chart/cell", params={"year": 2025, "type": "day", "weekIndex": 0, "dayIndex": 0})

        assert response.status_code == 401

    def test_bad_query_params(self, admin_client):
        response = admin_client.delete("/api/chart/cell", params={"year": 2025, "type": "day", "weekIndex": 0})

        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Bad query params"}
