"""
DeactivateLicenseCommand.

Command to release a domain's activation.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class DeactivateLicenseCommand:
    """Command to deactivate a license on a domain."""

    license_key: str
    domain: str
    ip_address: Optional[str] = None
