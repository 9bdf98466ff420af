"""
Admin license handlers.

Handlers behind the admin API: lookup, listing, edits, deletion and
dashboard statistics.
"""
import logging
from datetime import datetime
from typing import List

from activations.application.dto.activation_dto import ActivationSummaryDTO
from core.domain.exceptions import LicenseNotFoundError
from core.domain.value_objects import AuditAction
from licenses.application.commands.admin_license_commands import (
    DeleteLicenseCommand,
    UpdateLicenseCommand,
)
from licenses.application.dto.license_dto import (
    LicenseDTO,
    LicenseStatsDTO,
    RecentActivationDTO,
)
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.application.services.audit_recorder import AuditRecorder
from licenses.domain.license import License

logger = logging.getLogger(__name__)


def _get_or_raise(store, license_key: str) -> License:
    license = store.licenses.find_by_key(license_key)
    if not license:
        raise LicenseNotFoundError(f"License {license_key} not found")
    return license


def _json_safe(changes: dict) -> dict:
    return {
        key: value.isoformat() if isinstance(value, datetime) else value
        for key, value in changes.items()
    }


class GetLicenseHandler:
    """Handler for single-license lookups, including past activations."""

    def __init__(self, store):
        """Initialize handler with store."""
        self.store = store

    def handle(self, license_key: str) -> LicenseDTO:
        """
        Handle get license query.

        Args:
            license_key: License key string

        Returns:
            LicenseDTO with every activation, active or not

        Raises:
            LicenseNotFoundError: If the key does not exist
        """
        license = _get_or_raise(self.store, license_key)
        activations = self.store.activations.find_all_by_license(license.id)
        return LicenseDTO.from_entity(
            license, [ActivationSummaryDTO.from_entity(a) for a in activations]
        )


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, store):
        """Initialize handler with store."""
        self.store = store

    def handle(self, query: ListLicensesQuery) -> List[LicenseDTO]:
        licenses = self.store.licenses.list(
            email=query.email, plan=query.plan, limit=query.limit, offset=query.offset
        )
        return [
            LicenseDTO.from_entity(
                license,
                [
                    ActivationSummaryDTO.from_entity(a)
                    for a in self.store.activations.find_active_by_license(license.id)
                ],
            )
            for license in licenses
        ]


class UpdateLicenseHandler:
    """Handler for UpdateLicenseCommand."""

    def __init__(self, store, audit_recorder: AuditRecorder):
        """Initialize handler with store and audit recorder."""
        self.store = store
        self.audit_recorder = audit_recorder

    def handle(self, command: UpdateLicenseCommand) -> LicenseDTO:
        """
        Handle update license command.

        Lowering max_activations below the current production count is
        allowed; existing activations stay and new ones are refused.

        Raises:
            LicenseNotFoundError: If the key does not exist
            ValueError: If no fields or unknown fields are given
        """
        if not command.changes:
            raise ValueError("No fields to update")

        with self.store.atomic():
            license = _get_or_raise(self.store, command.license_key)
            updated = self.store.licenses.save(license.update(**command.changes))
            self.audit_recorder.record(
                updated.id,
                AuditAction.UPDATED,
                ip_address=command.ip_address,
                details=_json_safe(command.changes),
            )

        logger.info(
            "License updated",
            extra={"license_id": str(updated.id), "fields": sorted(command.changes)},
        )
        activations = self.store.activations.find_active_by_license(updated.id)
        return LicenseDTO.from_entity(
            updated, [ActivationSummaryDTO.from_entity(a) for a in activations]
        )


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, store, audit_recorder: AuditRecorder):
        """Initialize handler with store and audit recorder."""
        self.store = store
        self.audit_recorder = audit_recorder

    def handle(self, command: DeleteLicenseCommand) -> None:
        """
        Handle delete license command.

        Activations go with the license. The audit entry survives it.

        Raises:
            LicenseNotFoundError: If the key does not exist
        """
        with self.store.atomic():
            license = _get_or_raise(self.store, command.license_key)
            self.audit_recorder.record(
                license.id,
                AuditAction.DELETED,
                ip_address=command.ip_address,
                details={"license_key": license.license_key, "email": str(license.email)},
            )
            self.store.licenses.delete(license.id)

        logger.info("License deleted", extra={"license_id": str(license.id)})


class LicenseStatsHandler:
    """Handler for the admin dashboard statistics."""

    def __init__(self, store):
        """Initialize handler with store."""
        self.store = store

    def handle(self) -> LicenseStatsDTO:
        stats = self.store.licenses.stats()
        return LicenseStatsDTO(
            total_licenses=stats["total_licenses"],
            active_activations=self.store.activations.count_active(),
            expired_licenses=stats["expired_licenses"],
            by_plan=stats["by_plan"],
            recent_activations=[
                RecentActivationDTO(**row) for row in self.store.activations.recent_active(10)
            ],
        )
