"""
Telemetry module - best-effort usage counters.

This module handles:
- Session and plugin usage events sent by installed clients
- Per-day usage aggregation through Celery tasks
- Age-based pruning of usage rows
"""
