"""
Product management handlers.

Handlers for creating, listing, updating and soft-deleting products.
"""
import logging
import uuid
from typing import List

from core.domain.exceptions import ProductNotFoundError
from products.application.commands.product_commands import (
    CreateProductCommand,
    DeactivateProductCommand,
    UpdateProductCommand,
)
from products.application.dto.product_dto import ProductDTO, ProductStatsDTO
from products.domain.product import Product
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


def _to_dto(product: Product, repository: ProductRepository, with_stats: bool = True) -> ProductDTO:
    stats = None
    if with_stats:
        stats = ProductStatsDTO(**repository.license_stats(product.id))
    return ProductDTO(
        id=product.id,
        slug=str(product.slug),
        name=product.name,
        description=product.description,
        current_version=product.current_version,
        download_url=product.download_url,
        changelog=product.changelog,
        is_active=product.is_active,
        created_at=product.created_at,
        updated_at=product.updated_at,
        stats=stats,
    )


class CreateProductHandler:
    """Handler for CreateProductCommand."""

    def __init__(self, product_repository: ProductRepository):
        """Initialize handler with repositories."""
        self.product_repository = product_repository

    def handle(self, command: CreateProductCommand) -> ProductDTO:
        """
        Handle create product command.

        Args:
            command: CreateProductCommand

        Returns:
            ProductDTO for the new product

        Raises:
            DuplicateProductSlugError: If the slug is already taken
            ValueError: If the slug or name is invalid
        """
        product = Product.create(
            slug=command.slug,
            name=command.name,
            description=command.description,
            current_version=command.current_version,
            download_url=command.download_url,
            changelog=command.changelog,
        )
        saved = self.product_repository.save(product)
        logger.info("Product created", extra={"product_id": str(saved.id), "slug": command.slug})
        return _to_dto(saved, self.product_repository, with_stats=False)


class ListProductsHandler:
    """Handler for listing products with license stats."""

    def __init__(self, product_repository: ProductRepository):
        """Initialize handler with repositories."""
        self.product_repository = product_repository

    def handle(self, include_inactive: bool = False) -> List[ProductDTO]:
        return [
            _to_dto(product, self.product_repository)
            for product in self.product_repository.list(include_inactive=include_inactive)
        ]


class GetProductHandler:
    """Handler for fetching one product with license stats."""

    def __init__(self, product_repository: ProductRepository):
        """Initialize handler with repositories."""
        self.product_repository = product_repository

    def handle(self, product_id: uuid.UUID) -> ProductDTO:
        product = self.product_repository.find_by_id(product_id)
        if not product:
            raise ProductNotFoundError(f"Product {product_id} not found")
        return _to_dto(product, self.product_repository)


class UpdateProductHandler:
    """Handler for UpdateProductCommand."""

    def __init__(self, product_repository: ProductRepository):
        """Initialize handler with repositories."""
        self.product_repository = product_repository

    def handle(self, command: UpdateProductCommand) -> ProductDTO:
        """
        Handle update product command.

        Args:
            command: UpdateProductCommand

        Returns:
            Updated ProductDTO (unchanged if no fields were given)

        Raises:
            ProductNotFoundError: If product not found
        """
        product = self.product_repository.find_by_id(command.product_id)
        if not product:
            raise ProductNotFoundError(f"Product {command.product_id} not found")
        if command.changes:
            product = self.product_repository.save(product.update(**command.changes))
        return _to_dto(product, self.product_repository)


class DeactivateProductHandler:
    """Handler for DeactivateProductCommand."""

    def __init__(self, product_repository: ProductRepository):
        """Initialize handler with repositories."""
        self.product_repository = product_repository

    def handle(self, command: DeactivateProductCommand) -> ProductDTO:
        product = self.product_repository.find_by_id(command.product_id)
        if not product:
            raise ProductNotFoundError(f"Product {command.product_id} not found")
        saved = self.product_repository.save(product.deactivate())
        logger.info("Product deactivated", extra={"product_id": str(saved.id)})
        return _to_dto(saved, self.product_repository)
