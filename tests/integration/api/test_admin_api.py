"""
Integration tests for admin API endpoints.
"""
import pytest
from django.urls import reverse

from conftest import ADMIN_SECRET

EMAIL = "alice@example.com"


def issue(api_client, **payload):
    body = {"email": EMAIL, "name": "Alice"}
    body.update(payload)
    return api_client.post(
        reverse("license_admin:licenses"), body, HTTP_X_ADMIN_SECRET=ADMIN_SECRET, format="json"
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminAPI:
    """Integration tests for the admin API."""

    def test_issue_license(self, api_client, frozen_container):
        response = issue(api_client, licenseType="trial")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert len(data["key"]) == 19
        assert data["email"] == EMAIL
        assert data["name"] == "Alice"
        assert data["licenseType"] == "trial"
        assert data["issuedAt"] == "2025-01-15T12:00:00Z"
        assert data["expiresAt"] == "2025-01-22T12:00:00Z"
        assert "adminSecret" not in data

    def test_secret_in_body(self, api_client, service_container):
        response = api_client.post(
            reverse("license_admin:licenses"),
            {"email": EMAIL, "name": "Alice", "adminSecret": ADMIN_SECRET},
            format="json",
        )
        assert response.json()["success"] is True

    @pytest.mark.parametrize("secret", [None, "", "wrong"])
    def test_bad_secret_rejected(self, api_client, service_container, secret):
        headers = {} if secret is None else {"HTTP_X_ADMIN_SECRET": secret}
        response = api_client.post(
            reverse("license_admin:licenses"), {"email": EMAIL}, format="json", **headers
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "reason": "Unauthorized",
            "message": "Unauthorized",
        }

    def test_bad_secret_on_list(self, api_client, service_container):
        response = api_client.get(reverse("license_admin:licenses"))
        assert response.json()["reason"] == "Unauthorized"

    def test_invalid_license_type(self, api_client, service_container):
        data = issue(api_client, licenseType="weekly").json()
        assert data["success"] is False
        assert data["reason"] == "InvalidLicenseType"

    def test_missing_fields(self, api_client, service_container):
        response = api_client.post(
            reverse("license_admin:licenses"), {}, HTTP_X_ADMIN_SECRET=ADMIN_SECRET, format="json"
        )
        data = response.json()
        assert data["reason"] == "MissingFields"
        assert data["fields"] == ["email", "name"]

    def test_disable_and_release_flow(self, api_client, service_container):
        key = issue(api_client).json()["key"]
        api_client.post(
            reverse("licenses:activate-license"),
            {"key": key, "email": EMAIL, "deviceId": "device-1", "name": "Laptop"},
            format="json",
        )

        response = api_client.post(
            reverse("license_admin:set-license-enabled"),
            {"key": key, "enabled": False},
            HTTP_X_ADMIN_SECRET=ADMIN_SECRET,
            format="json",
        )
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "License disabled"
        assert data["license"]["enabled"] is False
        assert data["license"]["deviceName"] == "Laptop"

        verify = api_client.post(
            reverse("licenses:verify-license"), {"key": key, "email": EMAIL}, format="json"
        )
        assert verify.json()["reason"] == "LicenseDisabled"

        response = api_client.post(
            reverse("license_admin:release-device"),
            {"key": key},
            HTTP_X_ADMIN_SECRET=ADMIN_SECRET,
            format="json",
        )
        data = response.json()
        assert data["success"] is True
        assert data["license"]["deviceId"] is None
        assert data["license"]["activationState"] == "activated"
        assert data["license"]["deviceReleasedAt"] is not None

    def test_release_unknown_key(self, api_client, service_container):
        response = api_client.post(
            reverse("license_admin:release-device"),
            {"key": "ZZZZ-ZZZZ-ZZZZ-ZZZZ"},
            HTTP_X_ADMIN_SECRET=ADMIN_SECRET,
            format="json",
        )
        assert response.status_code == 200
        assert response.json()["reason"] == "LicenseNotFound"

    def test_list_and_history(self, api_client, service_container):
        key = issue(api_client).json()["key"]
        issue(api_client, email="bob@example.com")
        api_client.post(
            reverse("licenses:activate-license"),
            {"key": key, "email": EMAIL, "deviceId": "device-1"},
            format="json",
        )

        response = api_client.get(
            reverse("license_admin:licenses"), {"email": EMAIL}, HTTP_X_ADMIN_SECRET=ADMIN_SECRET
        )
        data = response.json()
        assert data["total"] == 1
        assert data["licenses"][0]["key"] == key
        assert data["licenses"][0]["activationCount"] == 1

        response = api_client.get(
            reverse("license_admin:activation-history", kwargs={"key": key}),
            HTTP_X_ADMIN_SECRET=ADMIN_SECRET,
        )
        data = response.json()
        assert data["key"] == key
        assert len(data["activations"]) == 1
        assert data["activations"][0]["deviceId"] == "device-1"
        assert data["activations"][0]["deviceName"] == "PC of alice@example.com"
