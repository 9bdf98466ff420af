"""
RecordHeartbeatCommand.

Command sent periodically by installed plugins.
"""

from dataclasses import dataclass, field

from activations.domain.activation import SiteInfo


@dataclass
class RecordHeartbeatCommand:
    """Command to refresh an activation's heartbeat."""

    license_key: str
    domain: str
    site_info: SiteInfo = field(default_factory=SiteInfo)
