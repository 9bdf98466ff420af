"""
Audit repository port (interface).

Audit entries are only ever appended and listed.
"""
from abc import ABC, abstractmethod
from typing import List
import uuid

from licenses.domain.audit_entry import AuditEntry


class AuditRepository(ABC):
    """Abstract append-only repository for AuditEntry records."""

    @abstractmethod
    def append(self, entry: AuditEntry) -> AuditEntry:
        """
        Append an audit entry.

        Args:
            entry: AuditEntry to store

        Returns:
            Stored audit entry
        """
        pass

    @abstractmethod
    def find_by_license(self, license_id: uuid.UUID) -> List[AuditEntry]:
        """
        List audit entries for a license, oldest first.

        Args:
            license_id: License UUID

        Returns:
            List of AuditEntry records
        """
        pass
