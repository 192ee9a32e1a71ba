"""
App configuration for the core app.
"""
import asyncio
import atexit
import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    """Builds and opens the service container once per process."""

    name = "core"
    verbose_name = "License Server Core"

    container = None

    def ready(self):
        """Called when Django starts."""
        from django.conf import settings

        from core.container import ServiceContainer

        if self.container is not None:
            return

        self.container = ServiceContainer.from_settings(settings)
        atexit.register(self._close_container, self.container)

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.container.open_sync()
            logger.info(
                "License store opened", extra={"backend": settings.LICENSE_STORE_BACKEND}
            )
        else:
            # Started from inside an event loop (ASGI server); opened on first use
            logger.info("License store open deferred to first request")

    @staticmethod
    def _close_container(container):
        # Runs after executors are shut down, so no thread hop is possible here
        if container.is_open:
            asyncio.run(container.close())
            logger.info("License store closed")
