"""
Model registration for the licenses app.

Models live in ``licenses.infrastructure.models``.
"""
from licenses.infrastructure.models import License  # noqa: F401
