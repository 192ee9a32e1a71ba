"""
Serializers for admin endpoints.
"""

from rest_framework import serializers

from api.v1.licenses.serializers import EMAIL_MAX_LENGTH, optional_text
from core.domain.value_objects import LicenseType


class AdminRequestSerializer(serializers.Serializer):
    """Base serializer: the secret may also arrive in the body."""

    adminSecret = optional_text(write_only=True)


class IssueLicenseRequestSerializer(AdminRequestSerializer):
    """Serializer for issue license request."""

    email = optional_text(max_length=EMAIL_MAX_LENGTH)
    name = optional_text()
    licenseType = optional_text(
        max_length=32,
        help_text=f"One of: {', '.join(t.value for t in LicenseType)}. Defaults to annual.",
    )


class SetLicenseEnabledRequestSerializer(AdminRequestSerializer):
    """Serializer for enable/disable request."""

    key = optional_text(max_length=64)
    enabled = serializers.BooleanField(required=False, allow_null=True, default=None)


class ReleaseDeviceRequestSerializer(AdminRequestSerializer):
    """Serializer for device release request."""

    key = optional_text(max_length=64)


class LicenseSerializer(serializers.Serializer):
    """Serializer for the full license record."""

    key = serializers.CharField()
    email = serializers.EmailField()
    name = serializers.CharField()
    licenseType = serializers.CharField(source="license_type")
    issuedAt = serializers.DateTimeField(source="issued_at")
    expiresAt = serializers.DateTimeField(source="expires_at")
    activationState = serializers.CharField(source="activation_state")
    enabled = serializers.BooleanField()
    deviceId = serializers.CharField(source="device_id", allow_null=True)
    deviceName = serializers.CharField(source="device_name", allow_null=True)
    activationCount = serializers.IntegerField(source="activation_count")
    activatedAt = serializers.DateTimeField(source="activated_at", allow_null=True)
    deviceReleasedAt = serializers.DateTimeField(source="device_released_at", allow_null=True)
    daysRemaining = serializers.IntegerField(source="days_remaining")


class IssueLicenseResponseSerializer(serializers.Serializer):
    """Serializer for issue license response."""

    success = serializers.SerializerMethodField()
    key = serializers.CharField()
    email = serializers.EmailField()
    name = serializers.CharField()
    licenseType = serializers.CharField(source="license_type")
    issuedAt = serializers.DateTimeField(source="issued_at")
    expiresAt = serializers.DateTimeField(source="expires_at")

    def get_success(self, _obj) -> bool:
        return True


class AdminActionResponseSerializer(serializers.Serializer):
    """Serializer for enable/disable and device release responses."""

    success = serializers.SerializerMethodField()
    message = serializers.CharField()
    license = LicenseSerializer()

    def get_success(self, _obj) -> bool:
        return True


class LicenseListResponseSerializer(serializers.Serializer):
    """Serializer for license listing."""

    success = serializers.SerializerMethodField()
    total = serializers.IntegerField()
    licenses = LicenseSerializer(many=True)

    def get_success(self, _obj) -> bool:
        return True


class ActivationEventSerializer(serializers.Serializer):
    """Serializer for one activation event."""

    id = serializers.UUIDField()
    email = serializers.EmailField()
    deviceId = serializers.CharField(source="device_id")
    deviceName = serializers.CharField(source="device_name", allow_null=True)
    timestamp = serializers.DateTimeField()


class ActivationHistoryResponseSerializer(serializers.Serializer):
    """Serializer for activation history."""

    success = serializers.SerializerMethodField()
    key = serializers.CharField()
    activations = ActivationEventSerializer(many=True)

    def get_success(self, _obj) -> bool:
        return True
