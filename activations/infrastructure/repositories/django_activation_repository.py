"""
Django implementation of ActivationRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from typing import List, Optional

from django.db import IntegrityError, transaction

from activations.domain.activation import Activation
from activations.infrastructure.models import Activation as ActivationModel
from activations.ports.activation_repository import ActivationRepository
from core.domain.exceptions import DuplicateActivationError


class DjangoActivationRepository(ActivationRepository):
    """
    Django ORM implementation of ActivationRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: ActivationModel) -> Activation:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Activation model

        Returns:
            Activation domain entity
        """
        return Activation(
            id=model.id,
            license_id=model.license_id,
            domain=model.domain,
            site_url=model.site_url,
            wp_version=model.wp_version,
            plugin_version=model.plugin_version,
            activated_at=model.activated_at,
            last_heartbeat=model.last_heartbeat,
            is_active=model.is_active,
            deactivated_at=model.deactivated_at,
        )

    def _apply(self, model: ActivationModel, activation: Activation) -> ActivationModel:
        model.site_url = activation.site_url
        model.wp_version = activation.wp_version
        model.plugin_version = activation.plugin_version
        model.activated_at = activation.activated_at
        model.last_heartbeat = activation.last_heartbeat
        model.is_active = activation.is_active
        model.deactivated_at = activation.deactivated_at
        return model

    def add(self, activation: Activation) -> Activation:
        model = self._apply(
            ActivationModel(
                id=activation.id,
                license_id=activation.license_id,
                domain=activation.domain,
            ),
            activation,
        )
        try:
            # Savepoint keeps an enclosing transaction usable after a conflict
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as exc:
            raise DuplicateActivationError(
                f"Activation for {activation.domain} already exists"
            ) from exc
        return self._to_domain(model)

    def save(self, activation: Activation) -> Activation:
        model = ActivationModel.objects.get(id=activation.id)  # pylint: disable=no-member
        self._apply(model, activation).save()
        return self._to_domain(model)

    def find_by_license_and_domain(
        self, license_id: uuid.UUID, domain: str
    ) -> Optional[Activation]:
        try:
            # pylint: disable=no-member
            model = ActivationModel.objects.get(license_id=license_id, domain=domain)
            return self._to_domain(model)
        except ActivationModel.DoesNotExist:  # pylint: disable=no-member
            return None

    def find_active_by_license(self, license_id: uuid.UUID) -> List[Activation]:
        models = ActivationModel.objects.filter(  # pylint: disable=no-member
            license_id=license_id, is_active=True
        ).order_by("activated_at")
        return [self._to_domain(model) for model in models]

    def find_all_by_license(self, license_id: uuid.UUID) -> List[Activation]:
        models = ActivationModel.objects.filter(  # pylint: disable=no-member
            license_id=license_id
        ).order_by("activated_at")
        return [self._to_domain(model) for model in models]

    def count_active(self) -> int:
        return ActivationModel.objects.filter(is_active=True).count()  # pylint: disable=no-member

    def recent_active(self, limit: int = 10) -> List[dict]:
        rows = (
            ActivationModel.objects.filter(is_active=True)  # pylint: disable=no-member
            .select_related("license")
            .order_by("-activated_at")[:limit]
        )
        return [
            {
                "domain": row.domain,
                "activated_at": row.activated_at,
                "license_key": row.license.license_key,
                "email": row.license.email,
            }
            for row in rows
        ]
