"""
License DTOs for engine results and API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from activations.application.dto.activation_dto import ActivationSummaryDTO
from core.domain.outcomes import ValidationError
from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    license_key: str
    product_id: Optional[uuid.UUID]
    email: str
    plan: str
    max_activations: int
    expires_at: Optional[datetime]
    is_expired: bool
    metadata: Dict[str, Any]
    created_at: datetime
    updated_at: datetime
    activations: List[ActivationSummaryDTO] = field(default_factory=list)

    @classmethod
    def from_entity(
        cls, license: License, activations: Optional[List[ActivationSummaryDTO]] = None
    ) -> "LicenseDTO":
        return cls(
            id=license.id,
            license_key=license.license_key,
            product_id=license.product_id,
            email=str(license.email),
            plan=license.plan,
            max_activations=license.max_activations,
            expires_at=license.expires_at,
            is_expired=license.is_expired(),
            metadata=license.metadata.to_dict(),
            created_at=license.created_at,
            updated_at=license.updated_at,
            activations=activations or [],
        )


@dataclass
class CreateLicenseResult:
    """Outcome of license creation."""

    success: bool
    message: str
    license: LicenseDTO


@dataclass
class LicenseSummaryDTO:
    """License part of a successful validation."""

    plan: str
    email: str
    expires_at: Optional[datetime]
    max_activations: int
    current_activations: int
    production_activations: int
    dev_activations: int


@dataclass
class ProductSummaryDTO:
    """Product part of a successful validation."""

    slug: str
    name: str
    latest_version: str


@dataclass
class ValidatedActivationDTO:
    """Activation part of a successful validation."""

    domain: str
    activated_at: datetime


@dataclass
class ValidationResult:
    """
    Outcome of a validation.

    ``expired_at`` is only set for the ``expired`` error.
    """

    valid: bool
    message: str
    error: Optional[ValidationError] = None
    expired_at: Optional[datetime] = None
    license: Optional[LicenseSummaryDTO] = None
    product: Optional[ProductSummaryDTO] = None
    activation: Optional[ValidatedActivationDTO] = None

    @classmethod
    def failure(cls, error: ValidationError, message: str, **extra) -> "ValidationResult":
        return cls(valid=False, error=error, message=message, **extra)


@dataclass
class RecentActivationDTO:
    """One line of the admin dashboard's recent activity."""

    domain: str
    activated_at: datetime
    license_key: str
    email: str


@dataclass
class LicenseStatsDTO:
    """DTO for admin dashboard statistics."""

    total_licenses: int
    active_activations: int
    expired_licenses: int
    by_plan: Dict[str, int]
    recent_activations: List[RecentActivationDTO]
