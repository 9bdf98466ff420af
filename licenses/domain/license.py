"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.domain.value_objects import Email
from licenses.domain.license_key import generate_license_key

DEFAULT_PLAN = "standard"


@dataclass(frozen=True)
class LicenseMetadata:
    """
    Provenance of a license.

    Known producers (the admin API, the CLI, payment webhooks) fill the
    typed fields; anything else is carried through in ``extra``.
    """

    source: Optional[str] = None
    stripe_session_id: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    license_type: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN = ("source", "stripe_session_id", "stripe_customer_id", "license_type")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LicenseMetadata":
        """Build metadata from a stored JSON payload."""
        data = dict(data or {})
        known = {name: data.pop(name, None) for name in cls._KNOWN}
        return cls(**known, extra=data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to a JSON-compatible dict, dropping empty fields."""
        payload = dict(self.extra)
        for name in self._KNOWN:
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        return payload


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    A license grants use of a product on up to ``max_activations``
    production domains. Development domains are never counted.
    """

    id: uuid.UUID
    license_key: str
    product_id: Optional[uuid.UUID]
    email: Email
    plan: str
    max_activations: int
    expires_at: Optional[datetime]
    metadata: LicenseMetadata
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate license entity."""
        if not self.license_key:
            raise ValueError("License key is required")
        if self.max_activations < 1:
            raise ValueError("Max activations must be at least 1")

    @classmethod
    def create(
        cls,
        email: str,
        plan: str = DEFAULT_PLAN,
        max_activations: int = 1,
        expires_at: Optional[datetime] = None,
        product_id: Optional[uuid.UUID] = None,
        metadata: Optional[LicenseMetadata] = None,
        key_prefix: str = "TLAT",
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new License entity with a freshly generated key.

        Args:
            email: Owner email
            plan: Plan tag (standard, pro, agency, lifetime, annual, ...)
            max_activations: Production activation cap
            expires_at: Optional expiration datetime; None means perpetual
            product_id: Optional product the license is bound to
            metadata: Optional provenance metadata
            key_prefix: Prefix for the generated key
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=license_id or uuid.uuid4(),
            license_key=generate_license_key(key_prefix),
            product_id=product_id,
            email=Email(email),
            plan=plan or DEFAULT_PLAN,
            max_activations=max_activations,
            expires_at=expires_at,
            metadata=metadata or LicenseMetadata(),
            created_at=now,
            updated_at=now,
        )

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check if the license is past its expiry.

        Args:
            current_time: Current time (defaults to now, UTC)

        Returns:
            True if the license has an expiry and it has passed
        """
        if self.expires_at is None:
            return False
        return self.expires_at < (current_time or datetime.now(timezone.utc))

    def with_new_key(self, key_prefix: str = "TLAT") -> "License":
        """Create a copy carrying a newly generated key."""
        return replace(self, license_key=generate_license_key(key_prefix))

    def update(self, **changes) -> "License":
        """
        Create a new License instance with admin-editable fields changed.

        Editable fields are plan, max_activations, expires_at and email.
        """
        allowed = {"plan", "max_activations", "expires_at", "email"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Cannot update license fields: {', '.join(sorted(unknown))}")
        if "email" in changes:
            changes["email"] = Email(changes["email"])
        return replace(self, **changes, updated_at=datetime.now(timezone.utc))
