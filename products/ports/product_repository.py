"""
Product repository port (interface).

This defines the contract for product persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import uuid

from products.domain.product import Product


class ProductRepository(ABC):
    """
    Abstract repository for Product entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def save(self, product: Product) -> Product:
        """
        Save a product entity.

        Args:
            product: Product entity to save

        Returns:
            Saved product entity

        Raises:
            DuplicateProductSlugError: If the slug belongs to another product
        """
        pass

    @abstractmethod
    def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        """
        Find a product by ID.

        Args:
            product_id: Product UUID

        Returns:
            Product entity or None if not found
        """
        pass

    @abstractmethod
    def find_by_slug(self, slug: str) -> Optional[Product]:
        """
        Find a product by slug.

        Args:
            slug: Product slug

        Returns:
            Product entity or None if not found
        """
        pass

    @abstractmethod
    def list(self, include_inactive: bool = False) -> List[Product]:
        """
        List products ordered by name.

        Args:
            include_inactive: Include soft-deleted products

        Returns:
            List of Product entities
        """
        pass

    @abstractmethod
    def license_stats(self, product_id: uuid.UUID) -> Dict[str, int]:
        """
        Count licenses bound to a product.

        Args:
            product_id: Product UUID

        Returns:
            Dict with total_licenses, active_licenses and lifetime_licenses
        """
        pass
