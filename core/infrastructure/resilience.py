"""
Timeouts and bounded retries for store calls.
"""
import asyncio
import logging
import time
from typing import Awaitable, Callable, TypeVar

from core.domain.exceptions import StoreUnavailableError, TransientStoreError
from core.metrics import store_errors_total, store_operation_duration_seconds

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreGuard:
    """
    Run store coroutines under a deadline with bounded retries.

    Only TransientStoreError is retried: the adapter raises it when the
    failed attempt left nothing behind. A timeout is never retried since
    the abandoned attempt may still complete.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        attempts: int = 3,
        backoff: float = 0.1,
    ):
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self.timeout = timeout
        self.attempts = attempts
        self.backoff = backoff

    async def call(self, operation: str, factory: Callable[[], Awaitable[T]]) -> T:
        """
        Run one store operation.

        Args:
            operation: Operation name for logs and metrics
            factory: Zero-argument callable returning a fresh awaitable

        Returns:
            The operation result

        Raises:
            StoreUnavailableError: On timeout or when retries are exhausted
        """
        last_error = None
        for attempt in range(1, self.attempts + 1):
            start = time.monotonic()
            try:
                return await asyncio.wait_for(factory(), timeout=self.timeout)
            except asyncio.TimeoutError:
                store_errors_total.labels(operation=operation, error_type="timeout").inc()
                logger.error(
                    "Store operation timed out",
                    extra={"operation": operation, "timeout": self.timeout},
                )
                raise StoreUnavailableError(
                    f"License store did not answer {operation} within {self.timeout}s"
                )
            except TransientStoreError as e:
                last_error = e
                store_errors_total.labels(operation=operation, error_type="transient").inc()
                logger.warning(
                    "Transient store error",
                    extra={
                        "operation": operation,
                        "attempt": attempt,
                        "max_attempts": self.attempts,
                        "error": e.message,
                    },
                )
                if attempt < self.attempts:
                    await asyncio.sleep(self.backoff * (2 ** (attempt - 1)))
            finally:
                store_operation_duration_seconds.labels(operation=operation).observe(
                    time.monotonic() - start
                )

        raise StoreUnavailableError(
            f"License store unavailable after {self.attempts} attempts"
        ) from last_error
