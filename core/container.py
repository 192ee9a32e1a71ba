"""
Service container.

Builds the store adapters, the event bus, the telemetry sink and the
admin authorizer from Django settings, and hands out handlers wired to
them. One container is created per process by ``CoreConfig.ready``.
"""
import logging
from pathlib import Path
from typing import Optional

from asgiref.sync import async_to_sync

from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.application.handlers.activation_history_handler import (
    ActivationHistoryHandler,
)
from activations.ports.activation_event_repository import ActivationEventRepository
from core.application.authorization import AdminAuthorizer
from core.domain.clock import Clock, utcnow
from core.infrastructure.event_handlers import register_event_handlers
from core.infrastructure.events import InMemoryEventBus
from core.infrastructure.resilience import StoreGuard
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
from licenses.domain.services import LicenseKeyGenerator
from licenses.ports.license_store import LicenseStore
from telemetry.application.handlers.record_usage_handlers import (
    RecordPluginUseHandler,
    RecordSessionHandler,
)
from telemetry.ports.telemetry_sink import TelemetrySink

logger = logging.getLogger(__name__)

STORE_BACKENDS = ("django", "json", "memory")


def build_stores(backend: str, path: Optional[str] = None):
    """
    Create the license store and activation trail for a backend.

    Args:
        backend: One of ``django``, ``json`` or ``memory``
        path: License file for the ``json`` backend

    Returns:
        Tuple of (LicenseStore, ActivationEventRepository)
    """
    if backend == "django":
        from activations.infrastructure.repositories.django_activation_event_repository import (  # noqa: E501
            DjangoActivationEventRepository,
        )
        from licenses.infrastructure.repositories.django_license_store import (
            DjangoLicenseStore,
        )

        return DjangoLicenseStore(), DjangoActivationEventRepository()

    if backend == "json":
        from activations.infrastructure.repositories.json_lines_activation_event_repository import (  # noqa: E501
            JsonLinesActivationEventRepository,
        )
        from licenses.infrastructure.repositories.json_file_license_store import (
            JsonFileLicenseStore,
        )

        if not path:
            raise ValueError("LICENSE_STORE_PATH is required for the json backend")
        license_path = Path(path)
        events_path = license_path.with_name(f"{license_path.stem}.activations.jsonl")
        return JsonFileLicenseStore(license_path), JsonLinesActivationEventRepository(events_path)

    if backend == "memory":
        from activations.infrastructure.repositories.in_memory_activation_event_repository import (  # noqa: E501
            InMemoryActivationEventRepository,
        )
        from licenses.infrastructure.repositories.in_memory_license_store import (
            InMemoryLicenseStore,
        )

        return InMemoryLicenseStore(), InMemoryActivationEventRepository()

    raise ValueError(
        f"Unknown LICENSE_STORE_BACKEND '{backend}'. Expected one of: {', '.join(STORE_BACKENDS)}"
    )


class ServiceContainer:
    """Holds the process-wide collaborators and builds handlers on demand."""

    def __init__(
        self,
        store: LicenseStore,
        activation_events: ActivationEventRepository,
        authorizer: AdminAuthorizer,
        telemetry_sink: TelemetrySink,
        event_bus: Optional[InMemoryEventBus] = None,
        clock: Clock = utcnow,
        key_generation_attempts: int = 10,
        usage_recorder=None,
    ):
        self.store = store
        self.activation_events = activation_events
        self.authorizer = authorizer
        self.telemetry_sink = telemetry_sink
        self.event_bus = event_bus or InMemoryEventBus()
        self.clock = clock
        self.key_generation_attempts = key_generation_attempts
        self.usage_recorder = usage_recorder
        self.is_open = False

    @classmethod
    def from_settings(cls, settings) -> "ServiceContainer":
        """
        Build a container from Django settings.

        Args:
            settings: ``django.conf.settings``

        Returns:
            ServiceContainer with its event handlers registered
        """
        from activations.infrastructure.repositories.resilient_activation_event_repository import (  # noqa: E501
            ResilientActivationEventRepository,
        )
        from licenses.infrastructure.repositories.resilient_license_store import (
            ResilientLicenseStore,
        )
        from telemetry.infrastructure.celery_sink import CeleryTelemetrySink
        from telemetry.infrastructure.in_memory_sink import NullTelemetrySink
        from telemetry.infrastructure.usage_recorder import DailyUsageRecorder

        store, activation_events = build_stores(
            settings.LICENSE_STORE_BACKEND, getattr(settings, "LICENSE_STORE_PATH", None)
        )
        guard = StoreGuard(
            timeout=settings.STORE_TIMEOUT_SECONDS,
            attempts=settings.STORE_RETRY_ATTEMPTS,
            backoff=settings.STORE_RETRY_BACKOFF_SECONDS,
        )
        sink = CeleryTelemetrySink() if settings.TELEMETRY_ENABLED else NullTelemetrySink()

        container = cls(
            store=ResilientLicenseStore(store, guard),
            activation_events=ResilientActivationEventRepository(activation_events, guard),
            authorizer=AdminAuthorizer(settings.ADMIN_SECRET),
            telemetry_sink=sink,
            key_generation_attempts=settings.KEY_GENERATION_MAX_ATTEMPTS,
            usage_recorder=DailyUsageRecorder(),
        )
        register_event_handlers(container.event_bus)

        if not container.authorizer.configured:
            logger.warning("ADMIN_SECRET is empty; every admin request will be rejected")

        logger.info(
            "Service container built",
            extra={"store_backend": settings.LICENSE_STORE_BACKEND},
        )
        return container

    async def open(self) -> None:
        await self.store.open()
        self.is_open = True

    def open_sync(self) -> None:
        """Open from synchronous code that has no running event loop."""
        if not self.is_open:
            async_to_sync(self.open)()

    async def close(self) -> None:
        if self.is_open:
            await self.store.close()
            self.is_open = False

    # Handler factories

    def issue_license_handler(self) -> IssueLicenseHandler:
        return IssueLicenseHandler(
            store=self.store,
            authorizer=self.authorizer,
            key_generator=LicenseKeyGenerator(
                self.store, max_attempts=self.key_generation_attempts
            ),
            event_bus=self.event_bus,
            clock=self.clock,
        )

    def set_license_enabled_handler(self) -> SetLicenseEnabledHandler:
        return SetLicenseEnabledHandler(
            self.store, self.authorizer, event_bus=self.event_bus, clock=self.clock
        )

    def release_device_handler(self) -> ReleaseDeviceHandler:
        return ReleaseDeviceHandler(
            self.store, self.authorizer, event_bus=self.event_bus, clock=self.clock
        )

    def list_licenses_handler(self) -> ListLicensesHandler:
        return ListLicensesHandler(self.store, self.authorizer, clock=self.clock)

    def activation_history_handler(self) -> ActivationHistoryHandler:
        return ActivationHistoryHandler(self.store, self.activation_events, self.authorizer)

    def activate_license_handler(self) -> ActivateLicenseHandler:
        return ActivateLicenseHandler(
            self.store, self.activation_events, event_bus=self.event_bus, clock=self.clock
        )

    def verify_license_handler(self) -> VerifyLicenseHandler:
        return VerifyLicenseHandler(self.store, clock=self.clock)

    def check_access_handler(self) -> CheckAccessHandler:
        return CheckAccessHandler(self.store, clock=self.clock)

    def record_session_handler(self) -> RecordSessionHandler:
        return RecordSessionHandler(self.telemetry_sink, clock=self.clock)

    def record_plugin_use_handler(self) -> RecordPluginUseHandler:
        return RecordPluginUseHandler(self.telemetry_sink, clock=self.clock)


def get_container() -> ServiceContainer:
    """Return the container built at startup."""
    from django.apps import apps

    container = apps.get_app_config("core").container
    container.open_sync()
    return container
