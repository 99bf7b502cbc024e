"""
Integration tests for FastAPI endpoints.

Tests verify shift management, salary calculation and error responses.
The wage configuration is the conftest one (salary period 15th to 14th).
"""

import json

import pytest

from shiftpay.core.storage import clear_configuration_cache
from shiftpay.main import app
from shiftpay.routes.shared import wage_configuration_or_500

TODAY = "2026-03-20"


def add(client, start, end, **extra):
    return client.post("/api/shifts", json={"start": start, "end": end, **extra})


class TestPublicRoutes:
    """Test health and documentation routes."""

    def test_health_endpoint_returns_ok(self, test_client):
        """GET /health should return 200 OK for monitoring."""
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    def test_request_id_header(self, test_client):
        response = test_client.get("/health")

        assert "x-request-id" in response.headers

    def test_404_for_nonexistent_route(self, test_client):
        response = test_client.get("/api/nonexistent")

        assert response.status_code == 404


class TestShiftRoutes:
    """Add, list, edit and delete shifts."""

    def test_add_shift(self, test_client):
        response = add(test_client, "2026-03-16 08:00", "2026-03-16 16:00")

        assert response.status_code == 201
        data = response.json()
        assert data["start"] == "2026-03-16 08:00:00"
        assert data["end"] == "2026-03-16 16:00:00"
        assert data["hours"] == 8.0

    def test_add_shift_day_first_with_break(self, test_client):
        response = add(test_client, "16-03-2026 08:00", "16-03-2026 16:00", break_minutes=30)

        assert response.status_code == 201
        assert response.json()["end"] == "2026-03-16 15:30:00"
        assert response.json()["hours"] == 7.5

    def test_invalid_timestamp_returns_400(self, test_client):
        response = add(test_client, "tomorrow morning", "2026-03-16 16:00")

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Invalid start"

    def test_end_before_start_returns_400(self, test_client):
        response = add(test_client, "2026-03-16 16:00", "2026-03-16 08:00")

        assert response.status_code == 400

    def test_negative_break_rejected(self, test_client):
        response = add(test_client, "2026-03-16 08:00", "2026-03-16 16:00", break_minutes=-10)

        assert response.status_code == 422

    def test_list_shifts_in_period(self, test_client):
        add(test_client, "2026-03-16 08:00", "2026-03-16 16:00")
        add(test_client, "2026-02-16 08:00", "2026-02-16 16:00")

        current = test_client.get("/api/shifts", params={"today": TODAY})
        previous = test_client.get("/api/shifts", params={"today": TODAY, "offset": 1})
        everything = test_client.get("/api/shifts", params={"all": True})

        assert [shift["start"] for shift in current.json()] == ["2026-03-16 08:00:00"]
        assert [shift["start"] for shift in previous.json()] == ["2026-02-16 08:00:00"]
        assert len(everything.json()) == 2

    def test_list_newest_first(self, test_client):
        add(test_client, "2026-03-16 08:00", "2026-03-16 16:00")
        add(test_client, "2026-03-18 08:00", "2026-03-18 16:00")

        response = test_client.get("/api/shifts", params={"all": True, "newest_first": True})

        assert [shift["start"][:10] for shift in response.json()] == ["2026-03-18", "2026-03-16"]

    def test_edit_shift(self, test_client):
        shift_id = add(test_client, "2026-03-16 08:00", "2026-03-16 16:00").json()["id"]

        response = test_client.patch(f"/api/shifts/{shift_id}", json={"end": "2026-03-16 18:00"})

        assert response.status_code == 200
        assert response.json()["hours"] == 10.0

    def test_edit_without_values_returns_400(self, test_client):
        shift_id = add(test_client, "2026-03-16 08:00", "2026-03-16 16:00").json()["id"]

        response = test_client.patch(f"/api/shifts/{shift_id}", json={})

        assert response.status_code == 400

    def test_edit_unknown_shift_returns_404(self, test_client):
        response = test_client.patch("/api/shifts/999", json={"end": "2026-03-16 18:00"})

        assert response.status_code == 404

    def test_delete_shift(self, test_client):
        shift_id = add(test_client, "2026-03-16 08:00", "2026-03-16 16:00").json()["id"]

        assert test_client.delete(f"/api/shifts/{shift_id}").status_code == 204
        assert test_client.delete(f"/api/shifts/{shift_id}").status_code == 404

    def test_delete_all_requires_confirmation(self, test_client):
        add(test_client, "2026-03-16 08:00", "2026-03-16 16:00")
        add(test_client, "2026-03-17 08:00", "2026-03-17 16:00")

        refused = test_client.delete("/api/shifts")
        assert refused.status_code == 400
        assert len(test_client.get("/api/shifts", params={"all": True}).json()) == 2

        confirmed = test_client.delete("/api/shifts", params={"confirm": True})
        assert confirmed.status_code == 200
        assert confirmed.json() == {"deleted": 2}


class TestSalaryRoutes:
    """Salary period and earned amount."""

    def test_period_bounds(self, test_client):
        response = test_client.get("/api/salary/period", params={"today": TODAY})

        assert response.status_code == 200
        assert response.json() == {"start": "2026-03-15 00:00:00", "end": "2026-04-14 23:59:00", "offset": 0}

    def test_period_offset(self, test_client):
        response = test_client.get("/api/salary/period", params={"today": TODAY, "offset": 2})

        assert response.json()["start"] == "2026-01-15 00:00:00"
        assert response.json()["end"] == "2026-02-14 23:59:00"

    def test_negative_offset_rejected(self, test_client):
        response = test_client.get("/api/salary/period", params={"today": TODAY, "offset": -1})

        assert response.status_code == 422

    def test_salary_totals(self, test_client):
        # Sunday evening: base + evening bonus + Sunday bonus
        add(test_client, "2026-03-15 20:00", "2026-03-15 22:00")
        # Monday morning: base only
        add(test_client, "2026-03-16 08:00", "2026-03-16 12:30")

        response = test_client.get("/api/salary", params={"today": TODAY})

        assert response.status_code == 200
        data = response.json()
        assert data["shift_count"] == 2
        assert data["worked"] == {"hours": 6, "minutes": 30, "total_hours": 6.5}
        assert data["earned"] == pytest.approx(2 * (120 + 20 + 40) + 4.5 * 120)
        assert data["breakdown"]["base"] == {"minutes": 390, "amount": 780.0}
        assert data["warnings"] == []

    def test_salary_for_empty_period(self, test_client):
        add(test_client, "2026-03-16 08:00", "2026-03-16 16:00")

        response = test_client.get("/api/salary", params={"today": TODAY, "offset": 3})

        assert response.status_code == 200
        assert response.json()["earned"] == 0
        assert response.json()["shift_count"] == 0

    def test_salary_entries(self, test_client):
        add(test_client, "2026-03-16 22:00", "2026-03-17 02:00")

        response = test_client.get("/api/salary/entries", params={"today": TODAY})

        assert response.status_code == 200
        entries = response.json()["entries"]
        assert [entry["label"] for entry in entries] == ["general[0]", "base", "general[1]", "base"]
        assert sum(entry["minutes"] for entry in entries if entry["label"] == "base") == 240

    def test_invalid_configuration_returns_500_with_field(self, test_client, wage_config_file, wage_config_data):
        wage_config_data["general_bonuses"][0]["start"] = "7pm"
        wage_config_file.write_text(json.dumps(wage_config_data), encoding="utf-8")
        clear_configuration_cache()
        app.dependency_overrides.pop(wage_configuration_or_500)

        response = test_client.get("/api/salary", params={"today": TODAY})

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["field"] == "general_bonuses.0.start"
        assert detail["value"] == "7pm"
