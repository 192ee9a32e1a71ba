"""
Unit tests for InMemoryLicenseStore shared between threads.
"""
import asyncio
import threading
from datetime import timedelta

from core.domain.value_objects import LicenseType
from licenses.domain.license import License
from licenses.infrastructure.repositories.in_memory_license_store import InMemoryLicenseStore

from conftest import NOW


def make_license(index):
    return License.create(
        key=f"KEY{index:05d}",
        owner_email="alice@example.com",
        owner_name="Alice",
        license_type=LicenseType.ANNUAL,
        issued_at=NOW + timedelta(seconds=index),
    )


def test_listing_while_another_thread_inserts():
    store = InMemoryLicenseStore()
    done = threading.Event()
    errors = []

    def insert_many():
        try:
            for index in range(2000):
                asyncio.run(store.put(make_license(index)))
        finally:
            done.set()

    def read_until_done():
        try:
            while not done.is_set():
                asyncio.run(store.list())
                asyncio.run(store.find_by_email("alice@example.com"))
        except RuntimeError as e:
            errors.append(e)

    writer = threading.Thread(target=insert_many)
    reader = threading.Thread(target=read_until_done)
    reader.start()
    writer.start()
    writer.join()
    reader.join()

    assert errors == []
    listed = asyncio.run(store.list())
    assert len(listed) == 2000
    assert listed[0].key == "KEY01999"
