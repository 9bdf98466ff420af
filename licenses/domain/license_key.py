"""
License key generation.

Keys are human-transcribable: four groups of four characters drawn from
an alphabet without the look-alike characters 0/O and 1/I.
"""

import re
import secrets

KEY_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
KEY_GROUPS = 4
KEY_GROUP_LENGTH = 4
DEFAULT_KEY_PREFIX = "TLAT"


def generate_license_key(prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """
    Generate a license key in format: PREFIX-XXXX-XXXX-XXXX-XXXX.

    Args:
        prefix: Product tag placed before the random groups (e.g., 'TLAT')

    Returns:
        Generated license key string
    """
    parts = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_GROUP_LENGTH))
        for _ in range(KEY_GROUPS)
    ]
    return f"{prefix}-{'-'.join(parts)}"


def key_pattern(prefix: str = DEFAULT_KEY_PREFIX) -> "re.Pattern":
    """Return a regex matching well-formed keys for ``prefix``."""
    group = f"[{KEY_ALPHABET}]{{{KEY_GROUP_LENGTH}}}"
    return re.compile(rf"^{re.escape(prefix)}(-{group}){{{KEY_GROUPS}}}$")
