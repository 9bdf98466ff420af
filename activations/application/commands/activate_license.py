"""
ActivateLicenseCommand.

Command to activate a license on a site domain.
"""

from dataclasses import dataclass, field

from activations.domain.activation import SiteInfo


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license for a domain."""

    license_key: str
    domain: str
    site_info: SiteInfo = field(default_factory=SiteInfo)
