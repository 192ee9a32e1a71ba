"""
Pytest configuration and shared fixtures.
"""

import re
from datetime import datetime, timedelta, timezone

import pytest

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.infrastructure.repositories.in_memory_activation_event_repository import (
    InMemoryActivationEventRepository,
)
from core.application.authorization import AdminAuthorizer
from core.infrastructure.events import InMemoryEventBus
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.application.handlers.license_admin_handlers import (
    ListLicensesHandler,
    ReleaseDeviceHandler,
    SetLicenseEnabledHandler,
)
from licenses.application.handlers.verify_license_handler import (
    CheckAccessHandler,
    VerifyLicenseHandler,
)
from licenses.infrastructure.repositories.in_memory_license_store import InMemoryLicenseStore

ADMIN_SECRET = "test-secret"
NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
KEY_PATTERN = re.compile(r"[A-Z0-9]{4}(-[A-Z0-9]{4}){3}")


class FakeClock:
    """Settable clock for time-dependent rules."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    """Fixture for a clock frozen at NOW."""
    return FakeClock()


@pytest.fixture
def license_store():
    """Fixture for an in-memory LicenseStore."""
    return InMemoryLicenseStore()


@pytest.fixture
def activation_events():
    """Fixture for an in-memory activation trail."""
    return InMemoryActivationEventRepository()


@pytest.fixture
def authorizer():
    """Fixture for the admin authorizer."""
    return AdminAuthorizer(ADMIN_SECRET)


@pytest.fixture
def event_bus():
    """Fixture for an empty event bus."""
    return InMemoryEventBus()


@pytest.fixture
def issue_handler(license_store, authorizer, event_bus, clock):
    """Fixture for IssueLicenseHandler."""
    return IssueLicenseHandler(license_store, authorizer, event_bus=event_bus, clock=clock)


@pytest.fixture
def activate_handler(license_store, activation_events, event_bus, clock):
    """Fixture for ActivateLicenseHandler."""
    return ActivateLicenseHandler(
        license_store, activation_events, event_bus=event_bus, clock=clock
    )


@pytest.fixture
def verify_handler(license_store, clock):
    """Fixture for VerifyLicenseHandler."""
    return VerifyLicenseHandler(license_store, clock=clock)


@pytest.fixture
def check_access_handler(license_store, clock):
    """Fixture for CheckAccessHandler."""
    return CheckAccessHandler(license_store, clock=clock)


@pytest.fixture
def set_enabled_handler(license_store, authorizer, event_bus, clock):
    """Fixture for SetLicenseEnabledHandler."""
    return SetLicenseEnabledHandler(license_store, authorizer, event_bus=event_bus, clock=clock)


@pytest.fixture
def release_handler(license_store, authorizer, event_bus, clock):
    """Fixture for ReleaseDeviceHandler."""
    return ReleaseDeviceHandler(license_store, authorizer, event_bus=event_bus, clock=clock)


@pytest.fixture
def list_handler(license_store, authorizer, clock):
    """Fixture for ListLicensesHandler."""
    return ListLicensesHandler(license_store, authorizer, clock=clock)


@pytest.fixture
def issue_license(issue_handler):
    """Fixture returning a coroutine that issues a license and returns its DTO."""

    async def issue(email="alice@example.com", name="Alice", license_type="annual"):
        return await issue_handler.handle(
            IssueLicenseCommand(
                admin_secret=ADMIN_SECRET,
                email=email,
                name=name,
                license_type=license_type,
            )
        )

    return issue


@pytest.fixture
def activate(activate_handler):
    """Fixture returning a coroutine that activates a license."""

    async def run(key, email="alice@example.com", device_id="device-1", device_name=None):
        return await activate_handler.handle(
            ActivateLicenseCommand(
                key=key, email=email, device_id=device_id, device_name=device_name
            )
        )

    return run


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def service_container():
    """Fixture for the process container built from test settings."""
    from django.apps import apps

    container = apps.get_app_config("core").container
    container.open_sync()
    return container


@pytest.fixture
def frozen_container(service_container, monkeypatch):
    """Container whose clock is frozen at NOW and can be advanced."""
    fake = FakeClock()
    monkeypatch.setattr(service_container, "clock", fake)
    return fake
