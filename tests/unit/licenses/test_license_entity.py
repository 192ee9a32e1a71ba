"""
Unit tests for License domain entity.
"""
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.value_objects import ActivationState, LicenseType
from licenses.domain.license import License

ISSUED_AT = datetime(2025, 1, 1, 9, 30, tzinfo=timezone.utc)
KEY = "ABCD-EFGH-JKLM-NPQR"


def make_license(license_type=LicenseType.ANNUAL, **overrides):
    license = License.create(
        key=KEY,
        owner_email="alice@example.com",
        owner_name="Alice",
        license_type=license_type,
        issued_at=ISSUED_AT,
    )
    if overrides:
        from dataclasses import replace

        license = replace(license, **overrides)
    return license


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_create_license(self):
        """Test creating a license entity."""
        license = make_license()

        assert license.key == KEY
        assert str(license.owner_email) == "alice@example.com"
        assert license.owner_name == "Alice"
        assert license.activation_state == ActivationState.NOT_ACTIVATED
        assert license.admin_enabled is True
        assert license.bound_device_id is None
        assert license.activation_count == 0

    @pytest.mark.parametrize(
        "license_type,days",
        [
            (LicenseType.TRIAL, 7),
            (LicenseType.MONTHLY, 30),
            (LicenseType.ANNUAL, 365),
            (LicenseType.LIFETIME, 36500),
        ],
    )
    def test_expiration_follows_type(self, license_type, days):
        license = make_license(license_type)
        assert license.expires_at - license.issued_at == timedelta(days=days)

    def test_create_strips_input(self):
        license = License.create(
            key=KEY,
            owner_email="  alice@example.com ",
            owner_name="  Alice ",
            license_type=LicenseType.TRIAL,
            issued_at=ISSUED_AT,
        )
        assert str(license.owner_email) == "alice@example.com"
        assert license.owner_name == "Alice"

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError, match="Owner name"):
            License.create(
                key=KEY,
                owner_email="alice@example.com",
                owner_name=" ",
                license_type=LicenseType.TRIAL,
                issued_at=ISSUED_AT,
            )

    def test_invalid_email_rejected(self):
        with pytest.raises(ValueError, match="Invalid email"):
            License.create(
                key=KEY,
                owner_email="not-an-email",
                owner_name="Alice",
                license_type=LicenseType.TRIAL,
                issued_at=ISSUED_AT,
            )

    def test_expiry_boundary_is_inclusive(self):
        license = make_license(LicenseType.TRIAL)
        assert license.is_expired(license.expires_at) is False
        assert license.is_expired(license.expires_at + timedelta(microseconds=1)) is True

    def test_days_remaining_rounds_up(self):
        license = make_license(LicenseType.TRIAL)
        assert license.days_remaining(ISSUED_AT) == 7
        assert license.days_remaining(ISSUED_AT + timedelta(hours=1)) == 7
        assert license.days_remaining(license.expires_at - timedelta(seconds=1)) == 1
        assert license.days_remaining(license.expires_at) == 0
        assert license.days_remaining(license.expires_at + timedelta(days=3)) == 0

    def test_bind_device(self):
        now = ISSUED_AT + timedelta(days=1)
        bound = make_license().bind_device("device-1", "Laptop", now)

        assert bound.is_activated
        assert bound.bound_device_id == "device-1"
        assert bound.bound_device_name == "Laptop"
        assert bound.activation_count == 1
        assert bound.activated_at == now

    def test_rebind_same_device_keeps_binding(self):
        now = ISSUED_AT + timedelta(days=1)
        once = make_license().bind_device("device-1", "Laptop", now)
        twice = once.bind_device("device-1", None, now + timedelta(hours=1))

        assert twice.bound_device_id == "device-1"
        assert twice.bound_device_name == "Laptop"
        assert twice.activation_count == 2

    def test_bind_other_device_rejected(self):
        bound = make_license().bind_device("device-1", None, ISSUED_AT)
        with pytest.raises(ValueError, match="another device"):
            bound.bind_device("device-2", None, ISSUED_AT)

    def test_release_device_keeps_activation_state(self):
        bound = make_license().bind_device("device-1", "Laptop", ISSUED_AT)
        released_at = ISSUED_AT + timedelta(days=2)
        released = bound.release_device(released_at)

        assert released.bound_device_id is None
        assert released.bound_device_name is None
        assert released.activation_state == ActivationState.ACTIVATED
        assert released.activation_count == 1
        assert released.device_released_at == released_at
        assert released.is_bound_to_other_device("device-2") is False

    def test_with_enabled(self):
        license = make_license()
        disabled = license.with_enabled(False)

        assert disabled.admin_enabled is False
        assert license.admin_enabled is True
        assert disabled.with_enabled(True).admin_enabled is True

    def test_is_owned_by_is_case_insensitive(self):
        license = make_license()
        assert license.is_owned_by("ALICE@example.com")
        assert not license.is_owned_by("bob@example.com")
