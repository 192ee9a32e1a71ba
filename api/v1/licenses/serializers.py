"""
Serializers for client license endpoints.

Request fields are optional at this layer: presence is checked by the
handlers so every route reports missing input the same way.
"""

from rest_framework import serializers


# Length limit of the email columns
EMAIL_MAX_LENGTH = 254


def optional_text(max_length: int = 255, **kwargs):
    return serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=max_length, **kwargs
    )


class ActivateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for activate license request."""

    key = optional_text(max_length=64)
    email = optional_text(max_length=EMAIL_MAX_LENGTH)
    deviceId = optional_text()
    name = optional_text(help_text="Optional device label")


class VerifyLicenseRequestSerializer(serializers.Serializer):
    """Serializer for verify license request."""

    key = optional_text(max_length=64)
    email = optional_text(max_length=EMAIL_MAX_LENGTH)


class CheckAccessRequestSerializer(serializers.Serializer):
    """Serializer for access check request."""

    email = optional_text(max_length=EMAIL_MAX_LENGTH)


class ActivateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for activate license response."""

    validity = serializers.BooleanField()
    expiresAt = serializers.DateTimeField(source="expires_at")
    licenseType = serializers.CharField(source="license_type")
    daysRemaining = serializers.IntegerField(source="days_remaining")
    deviceId = serializers.CharField(source="device_id")
    activationCount = serializers.IntegerField(source="activation_count")
    message = serializers.CharField()


class VerifyLicenseResponseSerializer(serializers.Serializer):
    """Serializer for verify license response."""

    validity = serializers.BooleanField()
    expiresAt = serializers.DateTimeField(source="expires_at", required=False)
    licenseType = serializers.CharField(source="license_type", required=False)
    daysRemaining = serializers.IntegerField(source="days_remaining", required=False)
    reason = serializers.CharField(required=False)
    message = serializers.CharField(required=False)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # Only the fields relevant to the outcome are returned
        return {field: value for field, value in data.items() if value is not None}


class CheckAccessResponseSerializer(serializers.Serializer):
    """Serializer for access check response."""

    access = serializers.BooleanField()
    reason = serializers.CharField(required=False)
    message = serializers.CharField(required=False)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {field: value for field, value in data.items() if value is not None}

