"""
VerifyLicenseQuery.

Query to check whether a license may be used right now.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class VerifyLicenseQuery:
    """
    Query to verify a license.

    Read-only: verification never changes the license.
    """

    key: Optional[str]
    email: Optional[str]
