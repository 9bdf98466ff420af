"""
Activation token claims.

A token binds a license key to one domain. It proves provenance only;
validity is always re-checked against stored licenses and activations.
"""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TokenClaims:
    """Decoded contents of an activation token."""

    license_key: str
    domain: str
    plan: str
    expires_at: datetime

    def matches(self, license_key: str, domain: str) -> bool:
        """Check the token was issued for this license key and domain."""
        return self.license_key == license_key and self.domain == domain
