"""
Activation domain entity.

This is the core domain entity representing one domain's claim on a license.
It contains business logic and is independent of infrastructure.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from activations.domain.classifier import classify
from core.domain.value_objects import DomainClassification, DomainName


@dataclass(frozen=True)
class SiteInfo:
    """Details a WordPress site reports about itself."""

    site_url: Optional[str] = None
    wp_version: Optional[str] = None
    plugin_version: Optional[str] = None
    ip_address: Optional[str] = None

    def as_details(self) -> dict:
        """Return the non-empty fields, for audit details."""
        return {key: value for key, value in self.__dict__.items() if value}


@dataclass(frozen=True)
class Activation:
    """
    Activation domain entity.

    One row exists per (license, domain) pair. Deactivation is soft: the
    row is kept and can later be switched back on.
    """

    id: uuid.UUID
    license_id: uuid.UUID
    domain: str
    site_url: Optional[str]
    wp_version: Optional[str]
    plugin_version: Optional[str]
    activated_at: datetime
    last_heartbeat: Optional[datetime]
    is_active: bool
    deactivated_at: Optional[datetime]

    def __post_init__(self):
        """Validate activation entity."""
        if not self.license_id:
            raise ValueError("License ID is required")
        if not self.domain:
            raise ValueError("Domain is required")

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        domain: str,
        site_info: Optional[SiteInfo] = None,
        activation_id: Optional[uuid.UUID] = None,
    ) -> "Activation":
        """
        Create a new Activation entity.

        Args:
            license_id: License UUID
            domain: Site domain (normalised to lower case)
            site_info: Optional details reported by the site
            activation_id: Optional UUID (generated if not provided)

        Returns:
            Activation entity instance
        """
        site_info = site_info or SiteInfo()
        now = datetime.now(timezone.utc)
        return cls(
            id=activation_id or uuid.uuid4(),
            license_id=license_id,
            domain=str(DomainName(domain)),
            site_url=site_info.site_url,
            wp_version=site_info.wp_version,
            plugin_version=site_info.plugin_version,
            activated_at=now,
            last_heartbeat=now,
            is_active=True,
            deactivated_at=None,
        )

    @property
    def classification(self) -> DomainClassification:
        return classify(self.domain)

    @property
    def is_development(self) -> bool:
        return self.classification.is_development

    def record_heartbeat(self, site_info: Optional[SiteInfo] = None) -> "Activation":
        """
        Create a new Activation instance with a fresh heartbeat.

        Version fields are only overwritten by values the site reported.

        Returns:
            New Activation instance with updated heartbeat
        """
        site_info = site_info or SiteInfo()
        return replace(
            self,
            last_heartbeat=datetime.now(timezone.utc),
            wp_version=site_info.wp_version or self.wp_version,
            plugin_version=site_info.plugin_version or self.plugin_version,
        )

    def deactivate(self) -> "Activation":
        """
        Create a new Activation instance with deactivated status.

        Returns:
            New Activation instance with deactivated status
        """
        if not self.is_active:
            return self

        return replace(self, is_active=False, deactivated_at=datetime.now(timezone.utc))

    def reactivate(self, site_info: Optional[SiteInfo] = None) -> "Activation":
        """
        Create a new Activation instance switched back on.

        The activation time restarts, since the domain consumes a slot again.

        Returns:
            New Activation instance with active status
        """
        site_info = site_info or SiteInfo()
        now = datetime.now(timezone.utc)
        return replace(
            self,
            site_url=site_info.site_url or self.site_url,
            wp_version=site_info.wp_version or self.wp_version,
            plugin_version=site_info.plugin_version or self.plugin_version,
            activated_at=now,
            last_heartbeat=now,
            is_active=True,
            deactivated_at=None,
        )
