"""
Telemetry commands.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class RecordSessionCommand:
    """Command to count a client session."""

    email: Optional[str]
    device_id: Optional[str] = None


@dataclass
class RecordPluginUseCommand:
    """Command to count one plugin use."""

    email: Optional[str]
    plugin: Optional[str]
    device_id: Optional[str] = None
