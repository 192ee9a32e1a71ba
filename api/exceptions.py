"""
API exception handlers.

Expected failures (validation, authorization and license rules) are part
of the response contract: HTTP 200 with the view's boolean discriminator
set to false, a machine-readable ``reason`` and a human-readable
``message``. Only store unavailability and unexpected errors use 5xx.
"""

import logging
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import APIException, ParseError
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    DomainException,
    InfrastructureException,
    StoreUnavailableError,
    TransientStoreError,
)

logger = logging.getLogger(__name__)

DEFAULT_RESULT_FIELD = "success"


def failure_body(result_field: str, reason: str, message: str, **extra) -> Dict[str, Any]:
    """Build the uniform failure payload."""
    body = {result_field: False, "reason": reason, "message": message}
    body.update(extra)
    return body


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    result_field = getattr(context.get("view"), "result_field", DEFAULT_RESULT_FIELD)
    correlation_id = _get_correlation_id(context)

    if isinstance(exc, InfrastructureException):
        response = _handle_infrastructure_exception(exc, result_field, correlation_id)
    elif isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, result_field, correlation_id)
    elif isinstance(exc, (DRFValidationError, ParseError)):
        response = _handle_invalid_request(exc, result_field)
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = getattr(exc, "default_code", "api_error")
        response.data = failure_body(result_field, str(code), str(exc.detail))
    else:
        response = _handle_unexpected_exception(exc, result_field, correlation_id)

    if correlation_id:
        response["X-Correlation-ID"] = correlation_id
    return response


def _get_correlation_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract correlation ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "correlation_id", None)


def _handle_domain_exception(
    exc: DomainException, result_field: str, correlation_id: Optional[str]
) -> Response:
    """Expected outcomes: reported in the body, HTTP 200."""
    logger.info(
        "Domain outcome: %s - %s",
        exc.code,
        exc.message,
        extra={"correlation_id": correlation_id, "reason": exc.code},
    )
    extra = {}
    fields = getattr(exc, "fields", None)
    if fields:
        extra["fields"] = fields
    return Response(
        failure_body(result_field, exc.code, exc.message, **extra), status=status.HTTP_200_OK
    )


def _handle_infrastructure_exception(
    exc: InfrastructureException, result_field: str, correlation_id: Optional[str]
) -> Response:
    """Store trouble: the only domain-level failure mapped to 5xx."""
    logger.error(
        "Infrastructure failure: %s - %s",
        exc.code,
        exc.message,
        extra={"correlation_id": correlation_id, "reason": exc.code},
    )
    reason = StoreUnavailableError().code if isinstance(exc, TransientStoreError) else exc.code
    return Response(
        failure_body(result_field, reason, exc.message),
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


def _handle_invalid_request(exc: APIException, result_field: str) -> Response:
    """Malformed payloads get the same 200 shape as other validation failures."""
    if isinstance(exc, ParseError):
        return Response(
            failure_body(result_field, "InvalidRequest", str(exc.detail)),
            status=status.HTTP_200_OK,
        )
    return Response(
        failure_body(result_field, "InvalidField", "Invalid request fields", errors=exc.detail),
        status=status.HTTP_200_OK,
    )


def _handle_unexpected_exception(
    exc: Exception, result_field: str, correlation_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error(
        "Unexpected error: %s", exc, extra={"correlation_id": correlation_id}, exc_info=True
    )
    return Response(
        failure_body(result_field, "InternalError", "An internal error occurred"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
