"""
Audit entry domain entity.

Audit entries are append-only records of state-changing operations.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.domain.value_objects import AuditAction


@dataclass(frozen=True)
class AuditEntry:
    """
    Audit entry domain entity.

    ``license_id`` is kept as a plain value so entries outlive the
    license they describe.
    """

    id: uuid.UUID
    license_id: Optional[uuid.UUID]
    action: AuditAction
    domain: Optional[str]
    ip_address: Optional[str]
    details: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        license_id: Optional[uuid.UUID],
        action: AuditAction,
        domain: Optional[str] = None,
        ip_address: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "AuditEntry":
        return cls(
            id=uuid.uuid4(),
            license_id=license_id,
            action=action,
            domain=domain,
            ip_address=ip_address,
            details=details or {},
            created_at=datetime.now(timezone.utc),
        )
