"""
License key format.

Keys are opaque identifiers in the format XXXX-XXXX-XXXX-XXXX drawn
from uppercase letters and digits. The format is an identifier, not a
credential: the contract does not promise cryptographic unpredictability.
"""

import random
import string
from typing import Optional

KEY_ALPHABET = string.ascii_uppercase + string.digits
KEY_GROUPS = 4
KEY_GROUP_LENGTH = 4

_system_random = random.SystemRandom()


def generate_license_key(rng: Optional[random.Random] = None) -> str:
    """
    Generate a license key in format: XXXX-XXXX-XXXX-XXXX.

    Args:
        rng: Random source (defaults to the OS random source)

    Returns:
        Generated license key string
    """
    source = rng or _system_random
    parts = [
        "".join(source.choice(KEY_ALPHABET) for _ in range(KEY_GROUP_LENGTH))
        for _ in range(KEY_GROUPS)
    ]
    return "-".join(parts)


def mask_key(key: str) -> str:
    """Shorten a key for log output."""
    if not key:
        return "N/A"
    return f"{key[:4]}..."
