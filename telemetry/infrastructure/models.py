"""
DailyUsage model.
"""
from django.db import models


class DailyUsage(models.Model):
    """
    Usage counters of one customer for one UTC day.
    """

    email = models.EmailField()
    date = models.DateField()
    sessions = models.PositiveIntegerField(default=0)
    total_uses = models.PositiveIntegerField(default=0)
    plugins = models.JSONField(default=dict, blank=True, help_text="Use count per plugin")
    device_id = models.CharField(max_length=255, null=True, blank=True)
    last_activity = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "daily_usage"
        ordering = ["-date"]
        unique_together = [["email", "date"]]
        indexes = [
            models.Index(fields=["date"], name="daily_usage_date_4b0c2e_idx"),
        ]

    def __str__(self):
        return f"{self.email} {self.date}"
