"""
Django implementation of AuditRepository port.
"""
import uuid
from typing import List

from core.domain.value_objects import AuditAction
from licenses.domain.audit_entry import AuditEntry
from licenses.infrastructure.models import AuditLog
from licenses.ports.audit_repository import AuditRepository


class DjangoAuditRepository(AuditRepository):
    """Django ORM implementation of AuditRepository."""

    def _to_domain(self, model: AuditLog) -> AuditEntry:
        return AuditEntry(
            id=model.id,
            license_id=model.license_id,
            action=AuditAction(model.action),
            domain=model.domain,
            ip_address=model.ip_address,
            details=model.details or {},
            created_at=model.created_at,
        )

    def append(self, entry: AuditEntry) -> AuditEntry:
        model = AuditLog.objects.create(
            id=entry.id,
            license_id=entry.license_id,
            action=entry.action.value,
            domain=entry.domain,
            ip_address=entry.ip_address,
            details=entry.details,
            created_at=entry.created_at,
        )
        return self._to_domain(model)

    def find_by_license(self, license_id: uuid.UUID) -> List[AuditEntry]:
        models = AuditLog.objects.filter(license_id=license_id).order_by("created_at")
        return [self._to_domain(model) for model in models]
