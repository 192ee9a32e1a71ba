"""
Model registration for the activations app.

Models live in ``activations.infrastructure.models``.
"""
from activations.infrastructure.models import ActivationEvent  # noqa: F401
