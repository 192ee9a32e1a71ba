"""
JSON file implementation of LicenseStore port.

Every write loads the whole file, mutates it and writes the whole file
back through a temporary file and an atomic rename. A process-wide lock
serializes writers inside one process; there is no isolation between
processes sharing the same file, so run a single process per file.
"""
import json
import logging
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from asgiref.sync import sync_to_async

from core.domain.exceptions import (
    DuplicateKeyError,
    LicenseNotFoundError,
    TransientStoreError,
)
from core.domain.value_objects import ActivationState, Email, LicenseType
from licenses.domain.license import License
from licenses.ports.license_store import LicenseMutation, LicenseStore

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

_process_lock = threading.RLock()


def _dump_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _load_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def license_to_record(license: License) -> Dict[str, Any]:
    """Convert a License to its JSON record."""
    return {
        "key": license.key,
        "owner_email": str(license.owner_email),
        "owner_name": license.owner_name,
        "license_type": license.license_type.value,
        "issued_at": _dump_datetime(license.issued_at),
        "expires_at": _dump_datetime(license.expires_at),
        "activation_state": license.activation_state.value,
        "admin_enabled": license.admin_enabled,
        "bound_device_id": license.bound_device_id,
        "bound_device_name": license.bound_device_name,
        "activation_count": license.activation_count,
        "activated_at": _dump_datetime(license.activated_at),
        "device_released_at": _dump_datetime(license.device_released_at),
    }


def record_to_license(record: Dict[str, Any]) -> License:
    """Convert a JSON record to a License."""
    return License(
        key=record["key"],
        owner_email=Email(record["owner_email"]),
        owner_name=record["owner_name"],
        license_type=LicenseType(record["license_type"]),
        issued_at=_load_datetime(record["issued_at"]),
        expires_at=_load_datetime(record["expires_at"]),
        activation_state=ActivationState(record.get("activation_state", "not_activated")),
        admin_enabled=record.get("admin_enabled", True),
        bound_device_id=record.get("bound_device_id"),
        bound_device_name=record.get("bound_device_name"),
        activation_count=record.get("activation_count", 0),
        activated_at=_load_datetime(record.get("activated_at")),
        device_released_at=_load_datetime(record.get("device_released_at")),
    )


class JsonFileLicenseStore(LicenseStore):
    """File-backed LicenseStore for low-volume deployments."""

    def __init__(self, path):
        self.path = Path(path)

    def _read(self) -> Dict[str, Dict[str, Any]]:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                document = json.load(fh)
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise TransientStoreError(f"Could not read license file: {e}") from e
        return document.get("licenses", {})

    def _write(self, records: Dict[str, Dict[str, Any]]) -> None:
        document = {"version": FORMAT_VERSION, "licenses": records}
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(document, fh, indent=2, sort_keys=True)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise TransientStoreError(f"Could not write license file: {e}") from e

    async def open(self) -> None:
        await sync_to_async(self._ensure_file, thread_sensitive=False)()

    def _ensure_file(self) -> None:
        with _process_lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self._write({})
                logger.info("Created license file", extra={"path": str(self.path)})

    async def put(self, license: License) -> License:
        def _put():
            with _process_lock:
                records = self._read()
                if license.key in records:
                    raise DuplicateKeyError()
                records[license.key] = license_to_record(license)
                self._write(records)
            return license

        return await sync_to_async(_put, thread_sensitive=False)()

    async def get(self, key: str) -> License:
        def _get():
            record = self._read().get(key)
            if record is None:
                raise LicenseNotFoundError()
            return record_to_license(record)

        return await sync_to_async(_get, thread_sensitive=False)()

    async def update(self, key: str, mutation: LicenseMutation) -> License:
        def _update():
            with _process_lock:
                records = self._read()
                record = records.get(key)
                if record is None:
                    raise LicenseNotFoundError()
                updated = mutation(record_to_license(record))
                if updated.key != key:
                    raise ValueError("Mutation must not change the license key")
                records[key] = license_to_record(updated)
                self._write(records)
            return updated

        return await sync_to_async(_update, thread_sensitive=False)()

    async def find_by_email(self, email: str) -> List[License]:
        return await self.list(email)

    async def exists(self, key: str) -> bool:
        def _exists():
            return key in self._read()

        return await sync_to_async(_exists, thread_sensitive=False)()

    async def list(self, email: Optional[str] = None) -> List[License]:
        def _list():
            licenses = [record_to_license(r) for r in self._read().values()]
            if email:
                licenses = [lic for lic in licenses if lic.is_owned_by(email)]
            return sorted(licenses, key=lambda lic: lic.issued_at, reverse=True)

        return await sync_to_async(_list, thread_sensitive=False)()
