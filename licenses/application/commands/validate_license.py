"""
ValidateLicenseCommand.

Command to check that a license is usable on a domain.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ValidateLicenseCommand:
    """Command to validate a license for a domain."""

    license_key: str
    domain: str
    token: Optional[str] = None
    product_slug: Optional[str] = None
