"""
Model registration for the telemetry app.

Models live in ``telemetry.infrastructure.models``.
"""
from telemetry.infrastructure.models import DailyUsage  # noqa: F401
