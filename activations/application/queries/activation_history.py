"""
ActivationHistoryQuery.

Query to read the activation trail of a license.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ActivationHistoryQuery:
    """Query for the activation events of one license."""

    admin_secret: Optional[str]
    key: Optional[str]
