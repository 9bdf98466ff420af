"""
Activation DTOs for engine results and API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from activations.domain.activation import Activation
from core.domain.outcomes import ActivationError, DeactivationError, HeartbeatError


@dataclass
class ActivationSummaryDTO:
    """DTO for one activation as reported to clients."""

    id: uuid.UUID
    domain: str
    site_url: Optional[str]
    wp_version: Optional[str]
    plugin_version: Optional[str]
    activated_at: datetime
    last_heartbeat: Optional[datetime]
    is_active: bool
    deactivated_at: Optional[datetime]
    is_dev_environment: bool

    @classmethod
    def from_entity(cls, activation: Activation) -> "ActivationSummaryDTO":
        return cls(
            id=activation.id,
            domain=activation.domain,
            site_url=activation.site_url,
            wp_version=activation.wp_version,
            plugin_version=activation.plugin_version,
            activated_at=activation.activated_at,
            last_heartbeat=activation.last_heartbeat,
            is_active=activation.is_active,
            deactivated_at=activation.deactivated_at,
            is_dev_environment=activation.is_development,
        )


@dataclass
class ActivationResult:
    """
    Outcome of an activation attempt.

    On failure only ``error`` and ``message`` are meaningful, plus
    ``activations`` for ``limit_reached`` so the caller can see which
    domains hold the slots.
    """

    success: bool
    message: str
    error: Optional[ActivationError] = None
    activation: Optional[ActivationSummaryDTO] = None
    token: Optional[str] = None
    already_activated: bool = False
    is_dev_environment: bool = False
    remaining: Optional[int] = None
    production_activations: Optional[int] = None
    dev_activations: Optional[int] = None
    activations: List[ActivationSummaryDTO] = field(default_factory=list)

    @classmethod
    def failure(cls, error: ActivationError, message: str, **extra) -> "ActivationResult":
        return cls(success=False, error=error, message=message, **extra)


@dataclass
class DeactivationResult:
    """Outcome of a deactivation attempt."""

    success: bool
    message: str
    error: Optional[DeactivationError] = None
    remaining: Optional[int] = None

    @classmethod
    def failure(cls, error: DeactivationError, message: str) -> "DeactivationResult":
        return cls(success=False, error=error, message=message)


@dataclass
class HeartbeatResult:
    """Outcome of a heartbeat; ``valid`` is False once the license expires."""

    success: bool
    message: str
    error: Optional[HeartbeatError] = None
    valid: bool = False
    expires_at: Optional[datetime] = None
    plan: Optional[str] = None

    @classmethod
    def failure(cls, error: HeartbeatError, message: str) -> "HeartbeatResult":
        return cls(success=False, error=error, message=message)
