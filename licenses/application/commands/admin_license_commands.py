"""
Admin license commands.

Commands for editing and removing licenses from the admin API.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class UpdateLicenseCommand:
    """Command to change admin-editable license fields."""

    license_key: str
    changes: Dict[str, Any] = field(default_factory=dict)
    ip_address: Optional[str] = None


@dataclass
class DeleteLicenseCommand:
    """Command to delete a license and its activations."""

    license_key: str
    ip_address: Optional[str] = None
