"""
Concurrency tests for device binding.
"""
import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.infrastructure.repositories.in_memory_activation_event_repository import (
    InMemoryActivationEventRepository,
)
from core.domain.exceptions import DeviceConflictError
from core.domain.value_objects import LicenseType
from licenses.domain.license import License
from licenses.infrastructure.repositories.in_memory_license_store import InMemoryLicenseStore
from licenses.infrastructure.repositories.json_file_license_store import JsonFileLicenseStore

from conftest import NOW

KEY = "ABCD-EFGH-JKLM-NPQR"


@pytest.fixture(params=["memory", "json"])
def racing_store(request, tmp_path):
    """Fixture for each shipped non-ORM store, opened and holding one fresh license."""
    if request.param == "json":
        store = JsonFileLicenseStore(tmp_path / "licenses.json")
    else:
        store = InMemoryLicenseStore()
    asyncio.run(store.open())
    asyncio.run(
        store.put(
            License.create(
                key=KEY,
                owner_email="alice@example.com",
                owner_name="Alice",
                license_type=LicenseType.ANNUAL,
                issued_at=NOW,
            )
        )
    )
    return store


def test_racing_devices_bind_exactly_one(racing_store):
    """Two devices activating the same fresh license at once: one wins, one conflicts."""
    events = InMemoryActivationEventRepository()
    handler = ActivateLicenseHandler(racing_store, events, clock=lambda: NOW)
    barrier = threading.Barrier(2)

    def attempt(device_id):
        barrier.wait()
        try:
            asyncio.run(
                handler.handle(
                    ActivateLicenseCommand(
                        key=KEY, email="alice@example.com", device_id=device_id
                    )
                )
            )
            return "activated"
        except DeviceConflictError:
            return "conflict"

    for round_number in range(1, 21):
        with ThreadPoolExecutor(max_workers=2) as pool:
            outcomes = sorted(pool.map(attempt, ["device-1", "device-2"]))

        assert outcomes == ["activated", "conflict"]

        license = asyncio.run(racing_store.get(KEY))
        assert license.bound_device_id in ("device-1", "device-2")
        assert license.activation_count == round_number
        asyncio.run(racing_store.update(KEY, lambda current: current.release_device(NOW)))

    assert len(asyncio.run(events.find_by_key(KEY))) == 20
