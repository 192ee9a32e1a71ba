"""
ReleaseDeviceCommand.

Command to free a license from its bound device.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ReleaseDeviceCommand:
    """Command to clear the device binding of a license."""

    admin_secret: Optional[str]
    key: Optional[str]
