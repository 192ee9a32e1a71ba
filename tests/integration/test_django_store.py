"""
Integration tests for the Django-backed store and activation trail.
"""
import threading
import time
from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.db import OperationalError, connection, transaction
from django.db.models import F

from activations.domain.activation_event import ActivationEvent
from activations.infrastructure.repositories.django_activation_event_repository import (
    DjangoActivationEventRepository,
)
from core.domain.exceptions import (
    DeviceConflictError,
    DuplicateKeyError,
    LicenseNotFoundError,
    StoreUnavailableError,
    TransientStoreError,
)
from core.domain.value_objects import LicenseType
from core.infrastructure.resilience import StoreGuard
from license_server.settings.base import postgres_options
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_license_store import DjangoLicenseStore
from licenses.infrastructure.repositories.resilient_license_store import ResilientLicenseStore

from conftest import NOW


def make_license(key="ABCD-EFGH-JKLM-NPQR", email="Alice@Example.com", issued_at=NOW):
    return License.create(
        key=key,
        owner_email=email,
        owner_name="Alice",
        license_type=LicenseType.ANNUAL,
        issued_at=issued_at,
    )


@pytest.fixture
def django_store():
    return DjangoLicenseStore()


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoLicenseStore:
    """Integration tests for DjangoLicenseStore."""

    def test_put_and_get(self, django_store):
        license = make_license()
        async_to_sync(django_store.put)(license)

        assert async_to_sync(django_store.get)(license.key) == license
        assert async_to_sync(django_store.exists)(license.key) is True

    def test_put_duplicate(self, django_store):
        async_to_sync(django_store.put)(make_license())
        with pytest.raises(DuplicateKeyError):
            async_to_sync(django_store.put)(make_license())

    def test_get_unknown(self, django_store):
        with pytest.raises(LicenseNotFoundError):
            async_to_sync(django_store.get)("ZZZZ-ZZZZ-ZZZZ-ZZZZ")

    def test_update_bumps_revision(self, django_store):
        license = async_to_sync(django_store.put)(make_license())

        updated = async_to_sync(django_store.update)(
            license.key, lambda current: current.bind_device("device-1", "Laptop", NOW)
        )

        row = LicenseModel.objects.get(key=license.key)
        assert updated.bound_device_id == "device-1"
        assert row.bound_device_id == "device-1"
        assert row.activation_state == "activated"
        assert row.revision == 1

    def test_failed_mutation_writes_nothing(self, django_store):
        license = async_to_sync(django_store.put)(
            make_license().bind_device("device-1", None, NOW)
        )

        def conflict(current):
            raise DeviceConflictError()

        with pytest.raises(DeviceConflictError):
            async_to_sync(django_store.update)(license.key, conflict)

        row = LicenseModel.objects.get(key=license.key)
        assert row.revision == 0
        assert row.bound_device_id == "device-1"

    def test_update_retries_after_concurrent_revision_bump(self, django_store):
        license = async_to_sync(django_store.put)(make_license())
        calls = []

        def disable(current):
            calls.append(current)
            if len(calls) == 1:
                # Another writer commits between our read and our write
                LicenseModel.objects.filter(key=current.key).update(revision=F("revision") + 1)
            return current.with_enabled(False)

        updated = async_to_sync(django_store.update)(license.key, disable)

        row = LicenseModel.objects.get(key=license.key)
        assert len(calls) == 2
        assert updated.admin_enabled is False
        assert row.admin_enabled is False
        assert row.revision == 2

    def test_update_gives_up_after_cas_attempts(self):
        store = DjangoLicenseStore(cas_attempts=3)
        license = async_to_sync(store.put)(make_license())
        calls = []

        def always_loses(current):
            calls.append(current)
            LicenseModel.objects.filter(key=current.key).update(revision=F("revision") + 1)
            return current.with_enabled(False)

        with pytest.raises(TransientStoreError):
            async_to_sync(store.update)(license.key, always_loses)

        row = LicenseModel.objects.get(key=license.key)
        assert len(calls) == 3
        assert row.admin_enabled is True
        assert row.revision == 3

    def test_find_by_email_is_case_insensitive(self, django_store):
        async_to_sync(django_store.put)(make_license("AAAA-AAAA-AAAA-AAAA"))
        async_to_sync(django_store.put)(
            make_license("BBBB-BBBB-BBBB-BBBB", email="bob@example.com")
        )

        found = async_to_sync(django_store.find_by_email)("alice@EXAMPLE.com")

        assert [license.key for license in found] == ["AAAA-AAAA-AAAA-AAAA"]
        assert str(found[0].owner_email) == "Alice@Example.com"

    def test_list_newest_first(self, django_store):
        async_to_sync(django_store.put)(make_license("AAAA-AAAA-AAAA-AAAA"))
        async_to_sync(django_store.put)(
            make_license("BBBB-BBBB-BBBB-BBBB", issued_at=NOW + timedelta(hours=1))
        )

        keys = [license.key for license in async_to_sync(django_store.list)()]
        assert keys == ["BBBB-BBBB-BBBB-BBBB", "AAAA-AAAA-AAAA-AAAA"]


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoActivationEventRepository:
    """Integration tests for DjangoActivationEventRepository."""

    def test_append_find_and_prune(self):
        repository = DjangoActivationEventRepository()
        old = ActivationEvent.record(
            key="ABCD-EFGH-JKLM-NPQR",
            email="alice@example.com",
            device_id="device-1",
            timestamp=NOW - timedelta(days=400),
        )
        new = ActivationEvent.record(
            key="ABCD-EFGH-JKLM-NPQR",
            email="alice@example.com",
            device_id="device-1",
            device_name="Laptop",
            timestamp=NOW,
        )
        async_to_sync(repository.append)(old)
        async_to_sync(repository.append)(new)

        events = async_to_sync(repository.find_by_key)("ABCD-EFGH-JKLM-NPQR")
        assert [event.id for event in events] == [new.id, old.id]
        assert events[0].device_name == "Laptop"

        cutoff = NOW - timedelta(days=365)
        assert async_to_sync(repository.prune_older_than)(cutoff, dry_run=True) == 1
        assert async_to_sync(repository.prune_older_than)(cutoff) == 1
        assert len(async_to_sync(repository.find_by_key)("ABCD-EFGH-JKLM-NPQR")) == 1


class DriverError(Exception):
    """Stands in for a driver exception carrying a SQLSTATE."""

    def __init__(self, message, pgcode):
        super().__init__(message)
        self.pgcode = pgcode


class FailingSelects:
    """Execute wrapper failing every SELECT the way the server reports a bound firing."""

    def __init__(self, pgcode):
        self.pgcode = pgcode
        self.calls = 0

    def __call__(self, execute, sql, params, many, context):
        if not sql.lstrip().upper().startswith("SELECT"):
            return execute(sql, params, many, context)
        self.calls += 1
        try:
            raise DriverError("canceling statement", self.pgcode)
        except DriverError as e:
            raise OperationalError(str(e)) from e


def guarded_store(timeout=1.0, attempts=3):
    return ResilientLicenseStore(
        DjangoLicenseStore(), StoreGuard(timeout=timeout, attempts=attempts, backoff=0.0)
    )


def test_postgres_options_bound_statements_and_locks():
    options = postgres_options(0.25)

    assert options["options"] == "-c statement_timeout=250 -c lock_timeout=250"
    assert options["connect_timeout"] == 10


@pytest.mark.django_db
@pytest.mark.integration
class TestDatabaseDeadlines:
    """The store deadline holds for queries running on the calling thread."""

    def test_cancelled_statement_is_not_retried(self):
        store = guarded_store()
        failing = FailingSelects(pgcode="57014")

        with connection.execute_wrapper(failing):
            with pytest.raises(StoreUnavailableError):
                async_to_sync(store.get)("ABCD-EFGH-JKLM-NPQR")

        assert failing.calls == 1

    def test_lock_timeout_is_retried_then_unavailable(self):
        store = guarded_store(attempts=3)
        failing = FailingSelects(pgcode="55P03")

        with connection.execute_wrapper(failing):
            with pytest.raises(StoreUnavailableError):
                async_to_sync(store.get)("ABCD-EFGH-JKLM-NPQR")

        assert failing.calls == 3


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
def test_held_row_lock_does_not_block_past_deadline():
    """A row locked by another connection fails the update within lock_timeout."""
    if connection.vendor != "postgresql":
        pytest.skip("row locks and lock_timeout need PostgreSQL")

    license = async_to_sync(DjangoLicenseStore().put)(make_license())
    locked = threading.Event()
    release = threading.Event()

    def hold_lock():
        try:
            with transaction.atomic():
                LicenseModel.objects.select_for_update().get(key=license.key)
                locked.set()
                release.wait(10)
        finally:
            connection.close()

    holder = threading.Thread(target=hold_lock)
    holder.start()
    try:
        assert locked.wait(5)
        with connection.cursor() as cursor:
            cursor.execute("SET lock_timeout = 200")

        start = time.monotonic()
        with pytest.raises(StoreUnavailableError):
            async_to_sync(guarded_store(timeout=2.0, attempts=1).update)(
                license.key, lambda current: current.with_enabled(False)
            )
        assert time.monotonic() - start < 2.0
    finally:
        release.set()
        holder.join()
