"""
SetLicenseEnabledCommand.

Command to enable or disable a license.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SetLicenseEnabledCommand:
    """Command to toggle the administrative enabled flag."""

    admin_secret: Optional[str]
    key: Optional[str]
    enabled: Optional[bool]
