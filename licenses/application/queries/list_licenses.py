"""
ListLicensesQuery.

Query to list licenses for operators.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ListLicensesQuery:
    """Query to list licenses, optionally for one customer email."""

    admin_secret: Optional[str]
    email: Optional[str] = None
