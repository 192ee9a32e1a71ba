"""
Admin secret authentication middleware.

This middleware guards every admin API route with the shared admin
secret before any view code runs.
"""

import json
import logging
from typing import Optional

from django.http import HttpRequest, HttpResponse, JsonResponse

from core.domain.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

ADMIN_PATH_PREFIX = "/api/v1/admin/"
ADMIN_SECRET_HEADER = "X-Admin-Secret"
ADMIN_SECRET_FIELD = "adminSecret"


def extract_admin_secret(request: HttpRequest) -> Optional[str]:
    """
    Read the admin secret from the header, the JSON body or form data.

    Args:
        request: HTTP request

    Returns:
        Supplied secret or None
    """
    header = request.headers.get(ADMIN_SECRET_HEADER)
    if header:
        return header

    if request.method in ("POST", "PUT", "PATCH"):
        content_type = request.content_type or ""
        if content_type.startswith("application/json"):
            try:
                payload = json.loads(request.body or b"{}")
            except ValueError:
                return None
            if isinstance(payload, dict):
                value = payload.get(ADMIN_SECRET_FIELD)
                return value if isinstance(value, str) else None
            return None
        return request.POST.get(ADMIN_SECRET_FIELD)

    return None


def unauthorized_response() -> HttpResponse:
    """Uniform rejection: the same body whatever else was wrong with the request."""
    error = UnauthorizedError()
    return JsonResponse(
        {"success": False, "reason": error.code, "message": error.message},
        status=200,
    )


class AdminSecretMiddleware:
    """
    Middleware for admin authentication.

    This middleware:
    1. Matches requests under /api/v1/admin/
    2. Checks the admin secret through the container's authorizer
    3. Rejects mismatches with the uniform Unauthorized body
    4. Exposes the checked secret as ``request.admin_secret``
    """

    def __init__(self, get_response):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if not request.path.startswith(ADMIN_PATH_PREFIX):
            return self.get_response(request)

        from core.container import get_container

        supplied = extract_admin_secret(request)
        if not get_container().authorizer.is_authorized(supplied):
            logger.warning(
                "Rejected admin request",
                extra={"path": request.path, "remote_addr": request.META.get("REMOTE_ADDR")},
            )
            return unauthorized_response()

        request.admin_secret = supplied  # type: ignore
        return self.get_response(request)
