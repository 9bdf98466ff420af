"""
Django implementation of ProductRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from typing import Dict, List, Optional

from django.db import IntegrityError, transaction
from django.db.models import Count, Q
from django.utils import timezone

from core.domain.exceptions import DuplicateProductSlugError
from core.domain.value_objects import ProductSlug
from products.domain.product import Product
from products.infrastructure.models import Product as ProductModel
from products.ports.product_repository import ProductRepository


class DjangoProductRepository(ProductRepository):
    """
    Django ORM implementation of ProductRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: ProductModel) -> Product:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Product model

        Returns:
            Product domain entity
        """
        return Product(
            id=model.id,
            slug=ProductSlug(model.slug),
            name=model.name,
            description=model.description,
            current_version=model.current_version,
            download_url=model.download_url,
            changelog=model.changelog,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, product: Product) -> ProductModel:
        """
        Convert domain entity to Django model.

        Args:
            product: Product domain entity

        Returns:
            Django Product model (unsaved changes applied)
        """
        model = ProductModel.objects.filter(id=product.id).first()
        if model is None:
            model = ProductModel(id=product.id, created_at=product.created_at)
        model.slug = str(product.slug)
        model.name = product.name
        model.description = product.description
        model.current_version = product.current_version
        model.download_url = product.download_url
        model.changelog = product.changelog
        model.is_active = product.is_active
        return model

    def save(self, product: Product) -> Product:
        model = self._to_model(product)
        try:
            with transaction.atomic():
                model.save()
        except IntegrityError as exc:
            raise DuplicateProductSlugError(
                f"A product with slug '{product.slug}' already exists"
            ) from exc
        return self._to_domain(model)

    def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        try:
            model = ProductModel.objects.get(id=product_id)
            return self._to_domain(model)
        except ProductModel.DoesNotExist:  # pylint: disable=no-member
            return None

    def find_by_slug(self, slug: str) -> Optional[Product]:
        model = ProductModel.objects.filter(slug=slug).first()
        return self._to_domain(model) if model else None

    def list(self, include_inactive: bool = False) -> List[Product]:
        queryset = ProductModel.objects.all()
        if not include_inactive:
            queryset = queryset.filter(is_active=True)
        return [self._to_domain(model) for model in queryset.order_by("name")]

    def license_stats(self, product_id: uuid.UUID) -> Dict[str, int]:
        """
        Count licenses bound to a product.

        A license is active when it has no expiry or expires in the future.
        """
        from licenses.infrastructure.models import License as LicenseModel

        now = timezone.now()
        stats = LicenseModel.objects.filter(product_id=product_id).aggregate(
            total_licenses=Count("id"),
            active_licenses=Count("id", filter=Q(expires_at__isnull=True) | Q(expires_at__gt=now)),
            lifetime_licenses=Count("id", filter=Q(plan="lifetime")),
        )
        return {key: value or 0 for key, value in stats.items()}
