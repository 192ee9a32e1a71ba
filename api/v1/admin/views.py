"""
Admin API views.

These endpoints are used by operators to:
- Issue licenses
- Enable or disable licenses
- Release the bound device of a license
- List licenses and read activation history

Every route requires the admin secret, supplied in the X-Admin-Secret
header or the ``adminSecret`` body field.
"""

import logging
from typing import Optional

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.queries.activation_history import ActivationHistoryQuery
from api.v1.admin.serializers import (
    ActivationHistoryResponseSerializer,
    AdminActionResponseSerializer,
    IssueLicenseRequestSerializer,
    IssueLicenseResponseSerializer,
    LicenseListResponseSerializer,
    ReleaseDeviceRequestSerializer,
    SetLicenseEnabledRequestSerializer,
)
from core.container import get_container
from core.middleware.auth import ADMIN_SECRET_FIELD, ADMIN_SECRET_HEADER
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.commands.release_device import ReleaseDeviceCommand
from licenses.application.commands.set_license_enabled import SetLicenseEnabledCommand
from licenses.application.queries.list_licenses import ListLicensesQuery

logger = logging.getLogger(__name__)

ADMIN_SECRET_PARAMETER = OpenApiParameter(
    name=ADMIN_SECRET_HEADER,
    type=str,
    location=OpenApiParameter.HEADER,
    required=False,
    description="Admin secret (may be sent as adminSecret in the body instead)",
)


class AdminAPIView(APIView):
    """Base view for admin endpoints."""

    authentication_classes = []
    permission_classes = [AllowAny]
    result_field = "success"

    def admin_secret(self, request: Request) -> Optional[str]:
        secret = getattr(request, "admin_secret", None)
        if secret:
            return secret
        header = request.headers.get(ADMIN_SECRET_HEADER)
        if header:
            return header
        if hasattr(request.data, "get"):
            return request.data.get(ADMIN_SECRET_FIELD)
        return None

    def validated(self, serializer_class, request: Request) -> dict:
        serializer = serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


class LicensesView(AdminAPIView):
    """View for issuing and listing licenses."""

    @extend_schema(
        operation_id="issue_license",
        summary="Issue License",
        description=(
            "Create a license for a customer. The generated key is returned once, "
            "in this response. licenseType defaults to annual."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_PARAMETER],
        request=IssueLicenseRequestSerializer,
        responses={200: IssueLicenseResponseSerializer, 503: {"description": "Store unavailable"}},
    )
    def post(self, request: Request) -> Response:
        """Issue a new license."""
        data = self.validated(IssueLicenseRequestSerializer, request)
        command = IssueLicenseCommand(
            admin_secret=self.admin_secret(request),
            email=data.get("email"),
            name=data.get("name"),
            license_type=data.get("licenseType"),
        )
        result = async_to_sync(get_container().issue_license_handler().handle)(command)
        return Response(IssueLicenseResponseSerializer(result).data)

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="List every license, newest first, optionally for one customer email.",
        tags=["Admin API"],
        parameters=[
            ADMIN_SECRET_PARAMETER,
            OpenApiParameter(
                name="email",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Customer email",
            ),
        ],
        responses={200: LicenseListResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        query = ListLicensesQuery(
            admin_secret=self.admin_secret(request),
            email=request.query_params.get("email"),
        )
        result = async_to_sync(get_container().list_licenses_handler().handle)(query)
        return Response(LicenseListResponseSerializer(result).data)


class SetLicenseEnabledView(AdminAPIView):
    """View for enabling and disabling licenses."""

    @extend_schema(
        operation_id="set_license_enabled",
        summary="Enable or Disable License",
        description=(
            "Set the administrative enabled flag. A disabled license fails "
            "activation and verification with LicenseDisabled."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_PARAMETER],
        request=SetLicenseEnabledRequestSerializer,
        responses={200: AdminActionResponseSerializer, 503: {"description": "Store unavailable"}},
    )
    def post(self, request: Request) -> Response:
        """Enable or disable a license."""
        data = self.validated(SetLicenseEnabledRequestSerializer, request)
        command = SetLicenseEnabledCommand(
            admin_secret=self.admin_secret(request),
            key=data.get("key"),
            enabled=data.get("enabled"),
        )
        result = async_to_sync(get_container().set_license_enabled_handler().handle)(command)
        return Response(AdminActionResponseSerializer(result).data)


class ReleaseDeviceView(AdminAPIView):
    """View for releasing the bound device."""

    @extend_schema(
        operation_id="release_device",
        summary="Release Device",
        description=(
            "Clear the device binding so the license can be activated on a new "
            "device. The activation state is kept."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_PARAMETER],
        request=ReleaseDeviceRequestSerializer,
        responses={200: AdminActionResponseSerializer, 503: {"description": "Store unavailable"}},
    )
    def post(self, request: Request) -> Response:
        """Release a license's device."""
        data = self.validated(ReleaseDeviceRequestSerializer, request)
        command = ReleaseDeviceCommand(admin_secret=self.admin_secret(request), key=data.get("key"))
        result = async_to_sync(get_container().release_device_handler().handle)(command)
        return Response(AdminActionResponseSerializer(result).data)


class ActivationHistoryView(AdminAPIView):
    """View for the activation trail of a license."""

    @extend_schema(
        operation_id="activation_history",
        summary="Activation History",
        description="List activation events of a license, newest first.",
        tags=["Admin API"],
        parameters=[ADMIN_SECRET_PARAMETER],
        responses={200: ActivationHistoryResponseSerializer},
    )
    def get(self, request: Request, key: str) -> Response:
        """Get activation history."""
        query = ActivationHistoryQuery(admin_secret=self.admin_secret(request), key=key)
        result = async_to_sync(get_container().activation_history_handler().handle)(query)
        return Response(ActivationHistoryResponseSerializer(result).data)
