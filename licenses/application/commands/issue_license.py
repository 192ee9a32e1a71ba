"""
IssueLicenseCommand.

Command to issue a new license to a customer.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class IssueLicenseCommand:
    """
    Command to issue a license.

    The generated key is returned once, in the handler's response.
    """

    admin_secret: Optional[str]
    email: Optional[str]
    name: Optional[str]
    license_type: Optional[str] = None  # Defaults to annual
