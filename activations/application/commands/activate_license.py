"""
ActivateLicenseCommand.

Command to bind a license to a device.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license on a device."""

    key: Optional[str]
    email: Optional[str]
    device_id: Optional[str]
    device_name: Optional[str] = None  # Defaults to "PC of <email>"
