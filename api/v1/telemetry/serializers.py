"""
Serializers for usage telemetry endpoints.
"""

from rest_framework import serializers

from api.v1.licenses.serializers import EMAIL_MAX_LENGTH, optional_text


class RecordSessionRequestSerializer(serializers.Serializer):
    """Serializer for session events."""

    email = optional_text(max_length=EMAIL_MAX_LENGTH)
    deviceId = optional_text()


class RecordPluginUseRequestSerializer(serializers.Serializer):
    """Serializer for plugin use events."""

    email = optional_text(max_length=EMAIL_MAX_LENGTH)
    plugin = optional_text(max_length=128)
    deviceId = optional_text()


class TelemetryResponseSerializer(serializers.Serializer):
    """Serializer for telemetry acknowledgements."""

    success = serializers.BooleanField()
