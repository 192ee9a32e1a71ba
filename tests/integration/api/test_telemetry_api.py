"""
Integration tests for telemetry and operational endpoints.
"""
import pytest
from django.urls import reverse

from core.metrics import licenses_issued_total
from telemetry.infrastructure.in_memory_sink import NullTelemetrySink
from telemetry.infrastructure.models import DailyUsage

from conftest import ADMIN_SECRET


@pytest.mark.django_db
@pytest.mark.integration
class TestTelemetryAPI:
    """Integration tests for the telemetry API."""

    def test_session_and_plugin(self, api_client, service_container):
        response = api_client.post(
            reverse("telemetry:record-session"),
            {"email": "alice@example.com", "deviceId": "d1"},
            format="json",
        )
        assert response.json() == {"success": True}

        response = api_client.post(
            reverse("telemetry:record-plugin-use"),
            {"email": "alice@example.com", "plugin": "exporter"},
            format="json",
        )
        assert response.json() == {"success": True}

        row = DailyUsage.objects.get(email="alice@example.com")
        assert row.sessions == 1
        assert row.plugins == {"exporter": 1}

    def test_missing_plugin(self, api_client, service_container):
        response = api_client.post(
            reverse("telemetry:record-plugin-use"), {"email": "alice@example.com"}, format="json"
        )
        data = response.json()
        assert data["success"] is False
        assert data["reason"] == "MissingFields"

    def test_disabled_sink(self, api_client, service_container, monkeypatch):
        monkeypatch.setattr(service_container, "telemetry_sink", NullTelemetrySink())
        response = api_client.post(
            reverse("telemetry:record-session"), {"email": "alice@example.com"}, format="json"
        )
        assert response.json() == {"success": False}
        assert DailyUsage.objects.count() == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestOperationalEndpoints:
    """Integration tests for health, readiness and metrics."""

    def test_health(self, client):
        assert client.get(reverse("health")).json()["status"] == "healthy"

    def test_ready(self, client, service_container):
        response = client.get(reverse("ready"))
        assert response.status_code == 200
        assert response.json()["checks"] == {"database": True, "license_store": True}

    def test_metrics(self, client, api_client, service_container):
        before = licenses_issued_total.labels(license_type="lifetime")._value.get()
        api_client.post(
            reverse("license_admin:licenses"),
            {"email": "a@example.com", "name": "A", "licenseType": "lifetime"},
            HTTP_X_ADMIN_SECRET=ADMIN_SECRET,
            format="json",
        )

        response = client.get(reverse("metrics"))

        assert response.status_code == 200
        assert b"licenses_issued_total" in response.content
        assert licenses_issued_total.labels(license_type="lifetime")._value.get() == before + 1
