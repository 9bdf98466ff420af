"""
Update check DTOs.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass
class UpdateDetailsDTO:
    """The release a site can update to."""

    version: str
    download_url: Optional[str]
    changelog: List[str] = field(default_factory=list)


@dataclass
class UpdateCheckDTO:
    """Answer to a plugin's update check."""

    slug: str
    current_version: str
    latest_version: Optional[str]
    has_update: bool
    license_valid: bool
    update_info: Optional[UpdateDetailsDTO] = None


@dataclass
class ChangelogEntryDTO:
    version: str
    changes: List[str]


@dataclass
class PluginInfoDTO:
    """Plugin details in the shape the WordPress plugin installer reads."""

    name: str
    slug: str
    version: str
    last_updated: datetime
    sections: Dict[str, str]
