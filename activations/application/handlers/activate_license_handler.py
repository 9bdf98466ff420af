"""
ActivateLicenseHandler.

Handler for activating a license on a domain.
"""
import logging
from typing import Tuple

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.dto.activation_dto import ActivationResult, ActivationSummaryDTO
from activations.domain.activation import Activation, SiteInfo
from activations.domain.classifier import classify
from activations.domain.services import SeatManager
from core.domain.exceptions import (
    ActivationLimitReachedError,
    DuplicateActivationError,
    InvalidDomainError,
    LicenseExpiredError,
    LicenseNotFoundError,
)
from core.domain.outcomes import ActivationError
from core.domain.value_objects import AuditAction, normalize_domain
from core.metrics import license_activations_total
from licenses.application.services.audit_recorder import AuditRecorder
from licenses.domain.license import License
from licenses.ports.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)

ACTIVATED_MESSAGE = "License activated successfully"
ACTIVATED_DEV_MESSAGE = (
    "License activated for development environment (doesn't count toward limit)"
)
ALREADY_ACTIVATED_MESSAGE = "License already activated for this domain"


class ActivateLicenseHandler:
    """
    Handler for ActivateLicenseCommand.

    The license row is locked for the whole read-check-write sequence.
    Backends without row locks are covered by the (license, domain) unique
    constraint and a recount after the insert that rolls back an
    over-cap write.
    """

    def __init__(self, store, token_issuer: TokenIssuer, audit_recorder: AuditRecorder):
        """Initialize handler with store and collaborators."""
        self.store = store
        self.token_issuer = token_issuer
        self.audit_recorder = audit_recorder

    def handle(self, command: ActivateLicenseCommand) -> ActivationResult:
        """
        Handle activate license command.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivationResult; failures carry invalid_domain, invalid_key,
            expired or limit_reached
        """
        try:
            domain = normalize_domain(command.domain)
        except InvalidDomainError as exc:
            license_activations_total.labels(outcome=exc.code, environment="unknown").inc()
            return ActivationResult.failure(ActivationError.INVALID_DOMAIN, exc.message)
        environment = classify(domain).value

        try:
            with self.store.atomic():
                result, outcome = self._activate(command.license_key, domain, command.site_info)
        except (LicenseNotFoundError, LicenseExpiredError) as exc:
            license_activations_total.labels(outcome=exc.code, environment=environment).inc()
            return ActivationResult.failure(ActivationError(exc.code), exc.message)
        except ActivationLimitReachedError as exc:
            license_activations_total.labels(
                outcome=exc.code, environment=environment
            ).inc()
            logger.info(
                "Activation limit reached",
                extra={"license_key": command.license_key, "domain": domain},
            )
            return ActivationResult.failure(
                ActivationError.LIMIT_REACHED,
                exc.message,
                activations=self._current_activations(command.license_key),
            )

        license_activations_total.labels(outcome=outcome, environment=environment).inc()
        return result

    def _activate(
        self, license_key: str, domain: str, site_info: SiteInfo
    ) -> Tuple[ActivationResult, str]:
        license = self.store.licenses.find_by_key(license_key, for_update=True)
        if not license:
            raise LicenseNotFoundError()
        if license.is_expired():
            raise LicenseExpiredError(expired_at=license.expires_at)

        active = self.store.activations.find_active_by_license(license.id)
        existing = SeatManager.find_active(active, domain)
        if existing:
            return self._refresh(license, existing, site_info, active), "already_active"

        SeatManager.ensure_capacity(license, active, domain)

        try:
            activation, action = self._claim(license, domain, site_info)
        except DuplicateActivationError:
            # Another request inserted this domain after our read
            activation = self.store.activations.find_by_license_and_domain(license.id, domain)
            if activation.is_active:
                active = self.store.activations.find_active_by_license(license.id)
                return self._refresh(license, activation, site_info, active), "already_active"
            activation = self.store.activations.save(activation.reactivate(site_info))
            action = AuditAction.REACTIVATED

        active = self.store.activations.find_active_by_license(license.id)
        if not activation.is_development:
            SeatManager.ensure_within_cap(license, active)

        self.audit_recorder.record(
            license.id,
            action,
            domain=domain,
            ip_address=site_info.ip_address,
            details=site_info.as_details(),
        )
        logger.info(
            "License activated",
            extra={
                "license_id": str(license.id),
                "domain": domain,
                "environment": activation.classification.value,
                "action": action.value,
            },
        )

        usage = SeatManager.usage(active)
        result = ActivationResult(
            success=True,
            message=ACTIVATED_DEV_MESSAGE if activation.is_development else ACTIVATED_MESSAGE,
            activation=ActivationSummaryDTO.from_entity(activation),
            token=self.token_issuer.issue(license, domain),
            is_dev_environment=activation.is_development,
            remaining=license.max_activations - usage.production,
            production_activations=usage.production,
            dev_activations=usage.development,
        )
        return result, action.value

    def _claim(
        self, license: License, domain: str, site_info: SiteInfo
    ) -> Tuple[Activation, AuditAction]:
        """Insert a new activation row, or switch a deactivated one back on."""
        stored = self.store.activations.find_by_license_and_domain(license.id, domain)
        if stored is None:
            created = Activation.create(license_id=license.id, domain=domain, site_info=site_info)
            return self.store.activations.add(created), AuditAction.ACTIVATED
        if stored.is_active:
            raise DuplicateActivationError()
        return self.store.activations.save(stored.reactivate(site_info)), AuditAction.REACTIVATED

    def _refresh(
        self,
        license: License,
        activation: Activation,
        site_info: SiteInfo,
        active: list,
    ) -> ActivationResult:
        """Idempotent re-activation: refresh the heartbeat, no slot consumed."""
        refreshed = self.store.activations.save(activation.record_heartbeat(site_info))
        usage = SeatManager.usage(active)
        return ActivationResult(
            success=True,
            message=ALREADY_ACTIVATED_MESSAGE,
            activation=ActivationSummaryDTO.from_entity(refreshed),
            token=self.token_issuer.issue(license, refreshed.domain),
            already_activated=True,
            is_dev_environment=refreshed.is_development,
            remaining=license.max_activations - usage.production,
            production_activations=usage.production,
            dev_activations=usage.development,
        )

    def _current_activations(self, license_key: str):
        license = self.store.licenses.find_by_key(license_key)
        if not license:
            return []
        return [
            ActivationSummaryDTO.from_entity(activation)
            for activation in self.store.activations.find_active_by_license(license.id)
        ]
