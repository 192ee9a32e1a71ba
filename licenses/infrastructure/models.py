"""
License model.
"""
from django.db import models
from django.utils import timezone


class License(models.Model):
    """
    A license issued to one customer and bound to at most one device.
    Never deleted; administrators disable it instead.
    """

    TYPE_CHOICES = [
        ("trial", "Trial"),
        ("monthly", "Monthly"),
        ("annual", "Annual"),
        ("lifetime", "Lifetime"),
    ]

    STATE_CHOICES = [
        ("not_activated", "Not activated"),
        ("activated", "Activated"),
    ]

    key = models.CharField(max_length=19, primary_key=True)
    owner_email = models.EmailField(db_index=True)
    owner_email_normalized = models.EmailField(
        db_index=True, help_text="Lowercased email for case-insensitive lookup"
    )
    owner_name = models.CharField(max_length=255)
    license_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default="annual")
    issued_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField()
    activation_state = models.CharField(
        max_length=20, choices=STATE_CHOICES, default="not_activated"
    )
    admin_enabled = models.BooleanField(default=True)
    bound_device_id = models.CharField(max_length=255, null=True, blank=True)
    bound_device_name = models.CharField(max_length=255, null=True, blank=True)
    activation_count = models.PositiveIntegerField(default=0)
    activated_at = models.DateTimeField(null=True, blank=True)
    device_released_at = models.DateTimeField(null=True, blank=True)
    revision = models.PositiveIntegerField(
        default=0, help_text="Bumped on every write; used for conditional updates"
    )

    class Meta:
        db_table = "licenses"
        ordering = ["-issued_at"]
        indexes = [
            models.Index(
                fields=["owner_email_normalized", "issued_at"],
                name="licenses_owner_e_5c1d2a_idx",
            ),
            models.Index(fields=["expires_at"], name="licenses_expires_8f4b61_idx"),
        ]

    def __str__(self):
        return f"{self.key[:4]}... ({self.license_type})"

    def save(self, *args, **kwargs):
        """Keep the normalized email in step with the owner email."""
        self.owner_email_normalized = (self.owner_email or "").strip().lower()
        super().save(*args, **kwargs)
