"""
Time source for the domain.

Handlers take a ``clock`` callable so expiration logic can be driven
by a fixed time in tests.
"""
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)
