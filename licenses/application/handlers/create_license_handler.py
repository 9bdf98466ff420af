"""
CreateLicenseHandler.

Handles the create license command.
"""
import logging

from core.domain.exceptions import (
    LicenseKeyConflictError,
    ProductNotFoundError,
    StoreUnavailableError,
)
from core.domain.value_objects import AuditAction
from core.metrics import license_key_conflicts_total, licenses_created_total
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.dto.license_dto import CreateLicenseResult, LicenseDTO
from licenses.application.services.audit_recorder import AuditRecorder
from licenses.domain.license import License

logger = logging.getLogger(__name__)


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(
        self,
        store,
        audit_recorder: AuditRecorder,
        key_prefix: str = "TLAT",
        max_key_attempts: int = 5,
    ):
        """Initialize handler with store and key settings."""
        self.store = store
        self.audit_recorder = audit_recorder
        self.key_prefix = key_prefix
        self.max_key_attempts = max_key_attempts

    def handle(self, command: CreateLicenseCommand) -> CreateLicenseResult:
        """
        Handle create license command.

        A key that collides with an existing one is regenerated, up to
        ``max_key_attempts`` times.

        Args:
            command: CreateLicenseCommand

        Returns:
            CreateLicenseResult with the stored license

        Raises:
            ProductNotFoundError: If product_id does not match a product
            StoreUnavailableError: If no unique key could be stored
            ValueError: If email or max_activations is invalid
        """
        if command.product_id and not self.store.products.find_by_id(command.product_id):
            raise ProductNotFoundError(f"Product {command.product_id} not found")

        license = License.create(
            email=command.email,
            plan=command.plan,
            max_activations=command.max_activations,
            expires_at=command.expires_at,
            product_id=command.product_id,
            metadata=command.metadata,
            key_prefix=self.key_prefix,
        )

        saved = None
        for attempt in range(1, self.max_key_attempts + 1):
            try:
                saved = self.store.licenses.add(license)
                break
            except LicenseKeyConflictError:
                license_key_conflicts_total.inc()
                logger.warning(
                    "Generated license key already exists, retrying",
                    extra={"attempt": attempt},
                )
                license = license.with_new_key(self.key_prefix)

        if saved is None:
            raise StoreUnavailableError(
                f"Could not store a unique license key after {self.max_key_attempts} attempts"
            )

        self.audit_recorder.record(
            saved.id,
            AuditAction.CREATED,
            details={
                "email": str(saved.email),
                "plan": saved.plan,
                "product_id": str(saved.product_id) if saved.product_id else None,
            },
        )
        licenses_created_total.labels(plan=saved.plan).inc()
        logger.info(
            "License created",
            extra={"license_id": str(saved.id), "plan": saved.plan},
        )

        return CreateLicenseResult(
            success=True,
            message="License created successfully",
            license=LicenseDTO.from_entity(saved),
        )
