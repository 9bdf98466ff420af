"""
Plugin update service.

Answers the WordPress update checks: is there a newer release of a
plugin, and may this site download it. The version check works without
a license; the download link is only handed out when the license
validates for the site's domain.
"""
import logging
from typing import List, Optional

from django.utils.html import format_html, format_html_join

from core.domain.exceptions import ProductNotFoundError
from products.application.dto.product_dto import ProductDTO
from products.application.dto.update_dto import (
    ChangelogEntryDTO,
    PluginInfoDTO,
    UpdateCheckDTO,
    UpdateDetailsDTO,
)
from products.domain.versions import is_newer

logger = logging.getLogger(__name__)

UNKNOWN_VERSION = "unknown"


def changelog_lines(text: str) -> List[str]:
    """Split release notes into changes, dropping list bullets and blank lines."""
    changes = []
    for line in (text or "").splitlines():
        line = line.strip().lstrip("-*").strip()
        if line:
            changes.append(line)
    return changes


class UpdateService:
    """Service for plugin update checks."""

    def __init__(self, engine, signer):
        """
        Initialize service.

        Args:
            engine: LicenseEngine
            signer: DownloadLinkSigner for download URLs
        """
        self.engine = engine
        self.signer = signer

    def _product(self, slug: str) -> Optional[ProductDTO]:
        product = self.engine.find_product_by_slug(slug)
        return product if product and product.is_active else None

    def _require_product(self, slug: str) -> ProductDTO:
        product = self._product(slug)
        if not product:
            raise ProductNotFoundError(f"Plugin {slug} not found")
        return product

    def check_for_update(
        self,
        slug: str,
        current_version: Optional[str] = None,
        license_key: Optional[str] = None,
        domain: Optional[str] = None,
    ) -> UpdateCheckDTO:
        """
        Compare a site's installed version with the latest release.

        Args:
            slug: Plugin slug
            current_version: Installed version; without it no update is offered
            license_key: Optional key, checked against the domain
            domain: Site domain

        Returns:
            UpdateCheckDTO; update_info carries a signed download URL only
            when the license is valid for this plugin and domain
        """
        product = self._product(slug)
        latest = product.current_version if product else None
        has_update = latest is not None and is_newer(latest, current_version)

        license_valid = False
        if license_key and domain:
            license_valid = self.engine.validate_license(
                license_key, domain, product_slug=slug
            ).valid

        update_info = None
        if has_update:
            download_url = None
            if license_valid and product.download_url:
                download_url = self.signer.sign(
                    product.download_url, slug, latest, domain, license_key
                )
            update_info = UpdateDetailsDTO(
                version=latest,
                download_url=download_url,
                changelog=changelog_lines(product.changelog),
            )

        logger.info(
            "Update check",
            extra={
                "slug": slug,
                "current_version": current_version,
                "latest_version": latest,
                "has_update": has_update,
                "license_valid": license_valid,
            },
        )
        return UpdateCheckDTO(
            slug=slug,
            current_version=current_version or UNKNOWN_VERSION,
            latest_version=latest,
            has_update=has_update,
            license_valid=license_valid,
            update_info=update_info,
        )

    def changelog(self, slug: str) -> List[ChangelogEntryDTO]:
        """
        Release notes for a plugin, newest first.

        Raises:
            ProductNotFoundError: If no active plugin has this slug
        """
        product = self._require_product(slug)
        return [
            ChangelogEntryDTO(
                version=product.current_version, changes=changelog_lines(product.changelog)
            )
        ]

    def plugin_info(self, slug: str) -> PluginInfoDTO:
        """
        Plugin details for the WordPress plugin installer.

        Section bodies are HTML with the stored text escaped.

        Raises:
            ProductNotFoundError: If no active plugin has this slug
        """
        product = self._require_product(slug)
        sections = {}
        if product.description:
            sections["description"] = format_html("<p>{}</p>", product.description)
        sections["changelog"] = format_html(
            "<h4>{}</h4>\n<ul>\n{}</ul>\n",
            product.current_version,
            format_html_join(
                "", "<li>{}</li>\n", ((change,) for change in changelog_lines(product.changelog))
            ),
        )
        return PluginInfoDTO(
            name=product.name,
            slug=product.slug,
            version=product.current_version,
            last_updated=product.updated_at,
            sections=sections,
        )
