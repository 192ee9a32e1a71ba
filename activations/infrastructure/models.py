"""
ActivationEvent model.
"""
import uuid

from django.db import models


class ActivationEvent(models.Model):
    """
    Append-only record of a successful activation.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license_key = models.CharField(max_length=19, db_index=True)
    email = models.EmailField()
    device_id = models.CharField(max_length=255)
    device_name = models.CharField(max_length=255, null=True, blank=True)
    timestamp = models.DateTimeField(db_index=True)

    class Meta:
        db_table = "activation_events"
        ordering = ["-timestamp"]
        indexes = [
            models.Index(fields=["license_key", "timestamp"], name="activation__license_3e9a70_idx"),
        ]

    def __str__(self):
        return f"{self.license_key[:4]}... @ {self.device_id}"
