"""
RecordHeartbeatHandler.

Handler for the periodic heartbeat sent by installed plugins.
"""
import logging

from activations.application.commands.record_heartbeat import RecordHeartbeatCommand
from activations.application.dto.activation_dto import HeartbeatResult
from core.domain.exceptions import InvalidDomainError, LicenseNotFoundError, NotActivatedError
from core.domain.outcomes import HeartbeatError
from core.domain.value_objects import normalize_domain
from core.metrics import license_heartbeats_total

logger = logging.getLogger(__name__)


class RecordHeartbeatHandler:
    """
    Handler for RecordHeartbeatCommand.

    Cheaper than a full validation: one license read and one activation
    update. Activation accounting is never touched.
    """

    def __init__(self, store):
        """Initialize handler with store."""
        self.store = store

    def handle(self, command: RecordHeartbeatCommand) -> HeartbeatResult:
        try:
            domain = normalize_domain(command.domain)
            license = self.store.licenses.find_by_key(command.license_key)
            if not license:
                raise LicenseNotFoundError()

            activation = self.store.activations.find_by_license_and_domain(license.id, domain)
            if activation is None or not activation.is_active:
                raise NotActivatedError("No active activation for this domain")
        except (InvalidDomainError, LicenseNotFoundError, NotActivatedError) as exc:
            license_heartbeats_total.labels(outcome=exc.code).inc()
            return HeartbeatResult.failure(HeartbeatError(exc.code), exc.message)

        self.store.activations.save(activation.record_heartbeat(command.site_info))
        license_heartbeats_total.labels(outcome="recorded").inc()
        logger.debug("Heartbeat recorded", extra={"license_id": str(license.id), "domain": domain})

        return HeartbeatResult(
            success=True,
            message="Heartbeat recorded",
            valid=not license.is_expired(),
            expires_at=license.expires_at,
            plan=license.plan,
        )
