"""
Product domain entity.

This is the domain entity representing a licensable plugin.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import ProductSlug


@dataclass(frozen=True)
class Product:
    """
    Product domain entity.

    Represents a plugin that licenses can be bound to. Products are
    never hard-deleted; deactivation hides them from listings while
    existing licenses keep their reference.
    """

    id: uuid.UUID
    slug: ProductSlug
    name: str
    description: str
    current_version: str
    download_url: Optional[str]
    changelog: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate product entity."""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Product name cannot be empty")
        if len(self.name) > 255:
            raise ValueError("Product name too long")

    @classmethod
    def create(
        cls,
        slug: str,
        name: str,
        description: str = "",
        current_version: str = "1.0.0",
        download_url: Optional[str] = None,
        changelog: str = "",
        product_id: Optional[uuid.UUID] = None,
    ) -> "Product":
        """
        Create a new Product entity.

        Args:
            slug: Product slug used by client plugins
            name: Product display name
            description: Optional description
            current_version: Latest released version
            download_url: Optional download location
            changelog: Release notes for the current version
            product_id: Optional UUID (generated if not provided)

        Returns:
            Product entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=product_id or uuid.uuid4(),
            slug=ProductSlug(slug),
            name=name.strip(),
            description=description or "",
            current_version=current_version or "1.0.0",
            download_url=download_url,
            changelog=changelog or "",
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    def update(self, **changes) -> "Product":
        """
        Create a new Product instance with the given fields changed.

        Only name, description, current_version, download_url, changelog
        and is_active may be changed; the slug is stable.
        """
        allowed = {
            "name",
            "description",
            "current_version",
            "download_url",
            "changelog",
            "is_active",
        }
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Cannot update product fields: {', '.join(sorted(unknown))}")
        if "name" in changes and changes["name"] is not None:
            changes["name"] = changes["name"].strip()
        return replace(self, **changes, updated_at=datetime.now(timezone.utc))

    def deactivate(self) -> "Product":
        """
        Create a new Product instance hidden from active listings.

        Returns:
            New Product instance with is_active False
        """
        return self.update(is_active=False)
