"""
Audit recorder service.

Appends audit entries for state-changing license operations. Recording
is fire-and-forget: a failed write is logged and never fails or rolls
back the operation being audited.
"""
import logging
import uuid
from typing import Any, Dict, Optional

from django.db import DatabaseError, transaction

from core.domain.value_objects import AuditAction
from core.metrics import audit_failures_total
from licenses.domain.audit_entry import AuditEntry
from licenses.ports.audit_repository import AuditRepository

logger = logging.getLogger(__name__)


class AuditRecorder:
    """Service for recording audit entries."""

    def __init__(self, audit_repository: AuditRepository):
        """Initialize recorder with repository."""
        self.audit_repository = audit_repository

    def record(
        self,
        license_id: Optional[uuid.UUID],
        action: AuditAction,
        domain: Optional[str] = None,
        ip_address: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> Optional[AuditEntry]:
        """
        Record an audit entry.

        Args:
            license_id: License the entry refers to, if any
            action: Audited action
            domain: Domain involved, if any
            ip_address: Caller IP address, if known
            details: Extra structured payload

        Returns:
            Stored AuditEntry, or None if the write failed
        """
        entry = AuditEntry.create(
            license_id=license_id,
            action=action,
            domain=domain,
            ip_address=ip_address,
            details=details,
        )
        try:
            # Savepoint so a failed insert leaves the caller's transaction intact
            with transaction.atomic():
                return self.audit_repository.append(entry)
        except DatabaseError as exc:
            audit_failures_total.labels(action=action.value).inc()
            logger.warning(
                "Failed to record audit entry",
                extra={
                    "license_id": str(license_id) if license_id else None,
                    "action": action.value,
                    "error": str(exc),
                },
            )
            return None
