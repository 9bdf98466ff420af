"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import Dict, List, Optional

from django.db import IntegrityError, transaction
from django.db.models import Count
from django.utils import timezone

from core.domain.exceptions import LicenseKeyConflictError
from core.domain.value_objects import Email
from licenses.domain.license import License, LicenseMetadata
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            license_key=model.license_key,
            product_id=model.product_id,
            email=Email(model.email),
            plan=model.plan,
            max_activations=model.max_activations,
            expires_at=model.expires_at,
            metadata=LicenseMetadata.from_dict(model.metadata),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: LicenseModel, license: License) -> LicenseModel:
        model.product_id = license.product_id
        model.email = str(license.email)
        model.plan = license.plan
        model.max_activations = license.max_activations
        model.expires_at = license.expires_at
        model.metadata = license.metadata.to_dict()
        return model

    def add(self, license: License) -> License:
        model = self._apply(LicenseModel(id=license.id, license_key=license.license_key), license)
        try:
            # Savepoint keeps an enclosing transaction usable after a conflict
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as exc:
            if LicenseModel.objects.filter(license_key=license.license_key).exists():
                raise LicenseKeyConflictError(
                    f"License key {license.license_key} already exists"
                ) from exc
            raise
        return self._to_domain(model)

    def save(self, license: License) -> License:
        model = LicenseModel.objects.get(id=license.id)
        self._apply(model, license).save()
        return self._to_domain(model)

    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        try:
            model = LicenseModel.objects.get(id=license_id)
            return self._to_domain(model)
        except LicenseModel.DoesNotExist:
            return None

    def find_by_key(self, license_key: str, for_update: bool = False) -> Optional[License]:
        """
        Find a license by its key.

        With ``for_update`` the row stays locked until the surrounding
        transaction ends, serialising activations per license on backends
        that support row locks.
        """
        queryset = LicenseModel.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        model = queryset.filter(license_key=license_key).first()
        return self._to_domain(model) if model else None

    def find_by_checkout_session(self, session_id: str) -> Optional[License]:
        model = (
            LicenseModel.objects.filter(metadata__stripe_session_id=session_id)
            .order_by("created_at")
            .first()
        )
        return self._to_domain(model) if model else None

    def list(
        self,
        email: Optional[str] = None,
        plan: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[License]:
        queryset = LicenseModel.objects.all()
        if email:
            queryset = queryset.filter(email__icontains=email)
        if plan:
            queryset = queryset.filter(plan=plan)
        models = queryset.order_by("-created_at")[offset : offset + limit]
        return [self._to_domain(model) for model in models]

    def delete(self, license_id: uuid.UUID) -> bool:
        deleted, _ = LicenseModel.objects.filter(id=license_id).delete()
        return deleted > 0

    def stats(self) -> Dict:
        by_plan = (
            LicenseModel.objects.values("plan").annotate(count=Count("id")).order_by("plan")
        )
        return {
            "total_licenses": LicenseModel.objects.count(),
            "expired_licenses": LicenseModel.objects.filter(expires_at__lt=timezone.now()).count(),
            "by_plan": {row["plan"]: row["count"] for row in by_plan},
        }
