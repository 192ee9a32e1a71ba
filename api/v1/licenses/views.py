"""
Client license API views.

These endpoints are used by installed clients to:
- Activate a license on a device
- Re-verify a license
- Check whether an email holds any usable license
"""

import logging

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.activate_license import ActivateLicenseCommand
from api.v1.licenses.serializers import (
    ActivateLicenseRequestSerializer,
    ActivateLicenseResponseSerializer,
    CheckAccessRequestSerializer,
    CheckAccessResponseSerializer,
    VerifyLicenseRequestSerializer,
    VerifyLicenseResponseSerializer,
)
from core.container import get_container
from licenses.application.queries.check_access import CheckAccessQuery
from licenses.application.queries.verify_license import VerifyLicenseQuery

logger = logging.getLogger(__name__)


class ClientAPIView(APIView):
    """Base view for unauthenticated client endpoints."""

    authentication_classes = []
    permission_classes = [AllowAny]
    result_field = "validity"

    def validated(self, serializer_class, request: Request) -> dict:
        serializer = serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


class ActivateLicenseView(ClientAPIView):
    """View for activating licenses."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Bind a license to a device. The first activation binds the device; "
            "repeating it from the same device succeeds; any other device is refused "
            "with DeviceConflict until an administrator releases the device. "
            "Failures are returned with validity=false and a reason."
        ),
        tags=["Client API"],
        request=ActivateLicenseRequestSerializer,
        responses={200: ActivateLicenseResponseSerializer, 503: {"description": "Store unavailable"}},
    )
    def post(self, request: Request) -> Response:
        """Activate a license for a device."""
        data = self.validated(ActivateLicenseRequestSerializer, request)
        command = ActivateLicenseCommand(
            key=data.get("key"),
            email=data.get("email"),
            device_id=data.get("deviceId"),
            device_name=data.get("name"),
        )
        result = async_to_sync(get_container().activate_license_handler().handle)(command)
        return Response(ActivateLicenseResponseSerializer(result).data)


class VerifyLicenseView(ClientAPIView):
    """View for verifying licenses."""

    @extend_schema(
        operation_id="verify_license",
        summary="Verify License",
        description=(
            "Check whether a license may be used now. Read-only: never changes the "
            "license. A license is valid when it exists, belongs to the email, is "
            "enabled, has been activated and has not expired."
        ),
        tags=["Client API"],
        request=VerifyLicenseRequestSerializer,
        responses={200: VerifyLicenseResponseSerializer, 503: {"description": "Store unavailable"}},
    )
    def post(self, request: Request) -> Response:
        """Verify a license."""
        data = self.validated(VerifyLicenseRequestSerializer, request)
        query = VerifyLicenseQuery(key=data.get("key"), email=data.get("email"))
        result = async_to_sync(get_container().verify_license_handler().handle)(query)
        return Response(VerifyLicenseResponseSerializer(result).data)


class CheckAccessView(ClientAPIView):
    """View for email-based access checks."""

    result_field = "access"

    @extend_schema(
        operation_id="check_access",
        summary="Check Access",
        description="Grant access when any license owned by the email is currently valid.",
        tags=["Client API"],
        request=CheckAccessRequestSerializer,
        responses={200: CheckAccessResponseSerializer, 503: {"description": "Store unavailable"}},
    )
    def post(self, request: Request) -> Response:
        """Check access by email."""
        data = self.validated(CheckAccessRequestSerializer, request)
        result = async_to_sync(get_container().check_access_handler().handle)(
            CheckAccessQuery(email=data.get("email"))
        )
        return Response(CheckAccessResponseSerializer(result).data)
