"""API tests for /api/daily."""

from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from jaimetro.daily.repository import SLOT_LABELS


class TestGetDaily:
    def test_explicit_date_creates_empty_record(self, client):
        response = client.get("/api/daily", params={"date": "2025-03-11"})

        assert response.status_code == 200
        assert response.headers["cache-control"] == "no-store"
        assert response.json() == {
            "ok": True,
            "data": {
                "date": "2025-03-11",
                "day": ["", ""],
                "night": ["", ""],
                "isAdmin": False,
                "slots": SLOT_LABELS,
            },
        }

    @patch("jaimetro.daily.clock.datetime")
    def test_defaults_to_business_date(self, mock_datetime, client):
        mock_datetime.now.return_value = datetime(2025, 3, 10, 19, 29, tzinfo=timezone.utc)

        response = client.get("/api/daily")

        assert response.json()["data"]["date"] == "2025-03-10"

    def test_admin_flag(self, admin_client):
        response = admin_client.get("/api/daily", params={"date": "2025-03-11"})

        assert response.json()["data"]["isAdmin"] is True

    @pytest.mark.parametrize("value", ["2025-3-11", "2025-02-30", "tomorrow"])
    def test_bad_date(self, client, value: str):
        response = client.get("/api/daily", params={"date": value})

        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Bad date"}

    def test_storage_down_serves_empty_record(self, offline_client):
        response = offline_client.get("/api/daily", params={"date": "2025-03-11"})

        assert response.status_code == 200
        payload = response.json()
        assert payload["ephemeral"] is True
        assert payload["data"]["day"] == ["", ""]
        assert payload["data"]["night"] == ["", ""]


class TestPatchDaily:
    def test_requires_admin(self, client):
        response = client.patch("/api/daily", json={"date": "2025-03-11", "slot": "day1", "value": "12"})

        assert response.status_code == 401

    def test_save_then_read_back(self, admin_client):
        response = admin_client.patch("/api/daily", json={"date": "2025-03-11", "slot": "night2", "value": " 45 ab"})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "data": {"date": "2025-03-11", "day": ["", ""], "night": ["", "45"]}}

        data = admin_client.get("/api/daily", params={"date": "2025-03-11"}).json()["data"]
        assert data["night"] == ["", "45"]

    def test_empty_value_clears_slot(self, admin_client):
        admin_client.patch("/api/daily", json={"date": "2025-03-11", "slot": "day1", "value": "12"})

        response = admin_client.patch("/api/daily", json={"date": "2025-03-11", "slot": "day1", "value": ""})

        assert response.json()["data"]["day"] == ["", ""]

    def test_unknown_slot(self, admin_client):
        response = admin_client.patch("/api/daily", json={"date": "2025-03-11", "slot": "day3", "value": "1"})

        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Bad payload"}

    def test_bad_date(self, admin_client):
        response = admin_client.patch("/api/daily", json={"date": "11-03-2025", "slot": "day1", "value": "1"})

        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Bad date"}
