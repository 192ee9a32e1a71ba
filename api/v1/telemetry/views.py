"""
Usage telemetry views.

Telemetry is fire-and-forget: an event is queued for the worker and the
client gets an acknowledgement. A sink failure is reported as
``success: false`` and never affects licensing.
"""

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.telemetry.serializers import (
    RecordPluginUseRequestSerializer,
    RecordSessionRequestSerializer,
    TelemetryResponseSerializer,
)
from core.container import get_container
from telemetry.application.commands.record_usage import (
    RecordPluginUseCommand,
    RecordSessionCommand,
)


class TelemetryAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    result_field = "success"


class RecordSessionView(TelemetryAPIView):
    """View for counting client sessions."""

    @extend_schema(
        operation_id="record_session",
        summary="Record Session",
        tags=["Telemetry API"],
        request=RecordSessionRequestSerializer,
        responses={200: TelemetryResponseSerializer},
    )
    def post(self, request: Request) -> Response:
        serializer = RecordSessionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        accepted = get_container().record_session_handler().handle(
            RecordSessionCommand(email=data.get("email"), device_id=data.get("deviceId"))
        )
        return Response({"success": accepted})


class RecordPluginUseView(TelemetryAPIView):
    """View for counting plugin uses."""

    @extend_schema(
        operation_id="record_plugin_use",
        summary="Record Plugin Use",
        tags=["Telemetry API"],
        request=RecordPluginUseRequestSerializer,
        responses={200: TelemetryResponseSerializer},
    )
    def post(self, request: Request) -> Response:
        serializer = RecordPluginUseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        accepted = get_container().record_plugin_use_handler().handle(
            RecordPluginUseCommand(
                email=data.get("email"),
                plugin=data.get("plugin"),
                device_id=data.get("deviceId"),
            )
        )
        return Response({"success": accepted})
