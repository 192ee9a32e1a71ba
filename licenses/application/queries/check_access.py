"""
CheckAccessQuery.

Query to check whether a customer holds any usable license.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CheckAccessQuery:
    """Query to check access by customer email."""

    email: Optional[str]
