"""
DeactivateLicenseHandler.

Handler for releasing a domain's activation.
"""
import logging

from activations.application.commands.deactivate_license import DeactivateLicenseCommand
from activations.application.dto.activation_dto import DeactivationResult
from activations.domain.services import SeatManager
from core.domain.exceptions import (
    ActivationNotFoundError,
    InvalidDomainError,
    LicenseNotFoundError,
)
from core.domain.outcomes import DeactivationError
from core.domain.value_objects import AuditAction, normalize_domain
from core.metrics import license_deactivations_total
from licenses.application.services.audit_recorder import AuditRecorder

logger = logging.getLogger(__name__)


class DeactivateLicenseHandler:
    """Handler for DeactivateLicenseCommand."""

    def __init__(self, store, audit_recorder: AuditRecorder):
        """Initialize handler with store and audit recorder."""
        self.store = store
        self.audit_recorder = audit_recorder

    def handle(self, command: DeactivateLicenseCommand) -> DeactivationResult:
        """
        Handle deactivate license command.

        The activation row is kept with is_active off so the domain can
        be activated again later.

        Args:
            command: DeactivateLicenseCommand

        Returns:
            DeactivationResult with the production slots now free
        """
        try:
            domain = normalize_domain(command.domain)
            result = self._deactivate(command, domain)
        except (InvalidDomainError, LicenseNotFoundError, ActivationNotFoundError) as exc:
            license_deactivations_total.labels(outcome=exc.code).inc()
            return DeactivationResult.failure(DeactivationError(exc.code), exc.message)

        license_deactivations_total.labels(outcome="deactivated").inc()
        return result

    def _deactivate(self, command: DeactivateLicenseCommand, domain: str) -> DeactivationResult:
        with self.store.atomic():
            license = self.store.licenses.find_by_key(command.license_key, for_update=True)
            if not license:
                raise LicenseNotFoundError()

            activation = self.store.activations.find_by_license_and_domain(license.id, domain)
            if activation is None or not activation.is_active:
                raise ActivationNotFoundError()

            self.store.activations.save(activation.deactivate())
            self.audit_recorder.record(
                license.id,
                AuditAction.DEACTIVATED,
                domain=domain,
                ip_address=command.ip_address,
            )

        logger.info(
            "License deactivated",
            extra={"license_id": str(license.id), "domain": domain},
        )
        active = self.store.activations.find_active_by_license(license.id)
        return DeactivationResult(
            success=True,
            message="License deactivated successfully",
            remaining=SeatManager.remaining(license, active),
        )
