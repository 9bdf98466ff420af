"""
Persistence store.

Bundles the repositories the license engine works against and owns the
transaction scope and connection lifecycle. One store is built at startup
and injected into the engine.
"""
import logging

from django.db import connections, transaction

from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from activations.ports.activation_repository import ActivationRepository
from licenses.infrastructure.repositories.django_audit_repository import DjangoAuditRepository
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)
from licenses.ports.audit_repository import AuditRepository
from licenses.ports.license_repository import LicenseRepository
from products.infrastructure.repositories.django_product_repository import (
    DjangoProductRepository,
)
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DjangoStore:
    """Relational store backed by the Django ORM."""

    def __init__(
        self,
        products: ProductRepository = None,
        licenses: LicenseRepository = None,
        activations: ActivationRepository = None,
        audit: AuditRepository = None,
    ):
        """
        Initialize store.

        Repositories default to the Django ORM adapters; tests may pass
        their own.
        """
        self.products = products or DjangoProductRepository()
        self.licenses = licenses or DjangoLicenseRepository()
        self.activations = activations or DjangoActivationRepository()
        self.audit = audit or DjangoAuditRepository()

    def atomic(self):
        """
        Transaction scope for a unit of work.

        Usage:
            with store.atomic():
                # Database operations
                pass
        """
        return transaction.atomic()

    def close(self) -> None:
        """Close every database connection held by this process."""
        logger.info("Closing database connections")
        connections.close_all()
