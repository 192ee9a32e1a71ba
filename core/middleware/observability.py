"""
Observability middleware.

This middleware adds structured request logging, request metrics and a
correlation id shared by every log record of one request.
"""

import logging
import time
import uuid
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.metrics import errors_total, http_request_duration_seconds, http_requests_total

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
SKIP_METRICS_PATHS = ("/metrics",)


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    This middleware:
    1. Reuses or generates a correlation ID per request
    2. Logs request/response information
    3. Records request count and duration in Prometheus
    4. Adds correlation ID and duration to response headers
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and add observability.

        Args:
            request: HTTP request

        Returns:
            HTTP response with observability headers
        """
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore

        start_time = time.monotonic()
        logger.info(
            "Request started",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.path,
                "remote_addr": request.META.get("REMOTE_ADDR"),
                "user_agent": request.META.get("HTTP_USER_AGENT", ""),
            },
        )

        try:
            response = self.get_response(request)
        except Exception as e:
            self._handle_exception(request, e, start_time, correlation_id)
            raise

        duration = time.monotonic() - start_time
        self._log_response(request, response, correlation_id, duration)
        self._record_metrics(request, response, duration)

        response[CORRELATION_HEADER] = correlation_id
        response["X-Request-Duration"] = f"{duration:.3f}"
        return response

    def _endpoint(self, request: HttpRequest) -> str:
        """Route pattern rather than raw path, so keys never become label values."""
        match = getattr(request, "resolver_match", None)
        if match is not None and match.route:
            return "/" + match.route
        return "unmatched"

    def _record_metrics(self, request, response, duration):
        if request.path in SKIP_METRICS_PATHS:
            return
        endpoint = self._endpoint(request)
        http_requests_total.labels(
            method=request.method, endpoint=endpoint, status_code=response.status_code
        ).inc()
        http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(
            duration
        )

    def _log_response(self, request, response, correlation_id, duration):
        """Log structured response information."""
        log_extra = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
        }

        if response.status_code >= 500:
            logger.error("Request completed with server error", extra=log_extra)
        elif response.status_code >= 400:
            logger.warning("Request completed with client error", extra=log_extra)
        else:
            logger.info("Request completed", extra=log_extra)

    def _handle_exception(self, request, e, start_time, correlation_id):
        """Handle and log request exception."""
        duration = time.monotonic() - start_time
        errors_total.labels(error_type=type(e).__name__, endpoint=self._endpoint(request)).inc()
        logger.error(
            "Request failed",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.path,
                "error": str(e),
                "error_type": type(e).__name__,
                "duration_ms": round(duration * 1000, 2),
            },
            exc_info=True,
        )
