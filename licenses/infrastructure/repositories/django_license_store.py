"""
Django implementation of LicenseStore port.

This adapter converts between domain entities and Django ORM models.
"""
import functools
import logging
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, InterfaceError, OperationalError, transaction

from core.domain.exceptions import (
    DuplicateKeyError,
    LicenseNotFoundError,
    StoreUnavailableError,
    TransientStoreError,
)
from core.domain.value_objects import ActivationState, Email, LicenseType
from licenses.domain.license import License
from licenses.domain.license_key import mask_key
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_store import LicenseMutation, LicenseStore

logger = logging.getLogger(__name__)

DEFAULT_CAS_ATTEMPTS = 5

# SQLSTATE of a statement cancelled by statement_timeout
QUERY_CANCELED = "57014"


def sqlstate(error: Exception) -> Optional[str]:
    """SQLSTATE of the driver error behind a Django database error, if any."""
    cause = error.__cause__
    return getattr(cause, "pgcode", None) or getattr(cause, "sqlstate", None)


def translate_db_errors(func):
    """
    Re-raise database errors as store errors.

    A statement cancelled by ``statement_timeout`` has used up the store
    deadline and is reported as unavailable. A row lock that could not be
    taken within ``lock_timeout`` and connection-level errors leave
    nothing behind, so they are raised as retryable.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except OperationalError as e:
            if sqlstate(e) == QUERY_CANCELED:
                raise StoreUnavailableError(f"Database statement timed out: {e}") from e
            raise TransientStoreError(f"Database error: {e}") from e
        except InterfaceError as e:
            raise TransientStoreError(f"Database error: {e}") from e

    return wrapper


class DjangoLicenseStore(LicenseStore):
    """
    Django ORM implementation of LicenseStore.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Serializes per-key updates with a row lock and a revision check

    Queries run on the calling thread, so the store deadline only holds
    when the database bounds them too: see ``postgres_options`` in the
    settings, which sets ``statement_timeout`` and ``lock_timeout``.
    """

    def __init__(self, cas_attempts: int = DEFAULT_CAS_ATTEMPTS):
        self.cas_attempts = cas_attempts

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            key=model.key,
            owner_email=Email(model.owner_email),
            owner_name=model.owner_name,
            license_type=LicenseType(model.license_type),
            issued_at=model.issued_at,
            expires_at=model.expires_at,
            activation_state=ActivationState(model.activation_state),
            admin_enabled=model.admin_enabled,
            bound_device_id=model.bound_device_id,
            bound_device_name=model.bound_device_name,
            activation_count=model.activation_count,
            activated_at=model.activated_at,
            device_released_at=model.device_released_at,
        )

    def _mutable_fields(self, license: License) -> dict:
        """Fields a mutation is allowed to change."""
        return {
            "activation_state": license.activation_state.value,
            "admin_enabled": license.admin_enabled,
            "bound_device_id": license.bound_device_id,
            "bound_device_name": license.bound_device_name,
            "activation_count": license.activation_count,
            "activated_at": license.activated_at,
            "device_released_at": license.device_released_at,
        }

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to a new Django model.

        Args:
            license: License domain entity

        Returns:
            Unsaved Django License model
        """
        return LicenseModel(
            key=license.key,
            owner_email=str(license.owner_email),
            owner_name=license.owner_name,
            license_type=license.license_type.value,
            issued_at=license.issued_at,
            expires_at=license.expires_at,
            **self._mutable_fields(license),
        )

    @sync_to_async
    @translate_db_errors
    def put(self, license: License) -> License:
        model = self._to_model(license)
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as e:
            raise DuplicateKeyError() from e
        return self._to_domain(model)

    @sync_to_async
    @translate_db_errors
    def get(self, key: str) -> License:
        try:
            model = LicenseModel.objects.get(key=key)
        except LicenseModel.DoesNotExist:
            raise LicenseNotFoundError()
        return self._to_domain(model)

    @sync_to_async
    @translate_db_errors
    def update(self, key: str, mutation: LicenseMutation) -> License:
        """
        Apply a mutation under a row lock.

        The write is conditional on the revision read inside the same
        transaction, so a writer that lost a race re-reads and re-runs
        the mutation against the fresh record.
        """
        for attempt in range(1, self.cas_attempts + 1):
            with transaction.atomic():
                try:
                    model = LicenseModel.objects.select_for_update().get(key=key)
                except LicenseModel.DoesNotExist:
                    raise LicenseNotFoundError()

                updated = mutation(self._to_domain(model))
                if updated.key != key:
                    raise ValueError("Mutation must not change the license key")

                rows = LicenseModel.objects.filter(
                    key=key, revision=model.revision
                ).update(revision=model.revision + 1, **self._mutable_fields(updated))
                if rows == 1:
                    return updated

            logger.info(
                "License update lost a race, retrying",
                extra={"license_key": mask_key(key), "attempt": attempt},
            )

        raise TransientStoreError("License update kept conflicting with concurrent writers")

    @sync_to_async
    @translate_db_errors
    def find_by_email(self, email: str) -> List[License]:
        normalized = (email or "").strip().lower()
        models = LicenseModel.objects.filter(owner_email_normalized=normalized)
        return [self._to_domain(model) for model in models]

    @sync_to_async
    @translate_db_errors
    def exists(self, key: str) -> bool:
        return LicenseModel.objects.filter(key=key).exists()

    @sync_to_async
    @translate_db_errors
    def list(self, email: Optional[str] = None) -> List[License]:
        queryset = LicenseModel.objects.all()
        if email:
            queryset = queryset.filter(owner_email_normalized=email.strip().lower())
        return [self._to_domain(model) for model in queryset]
