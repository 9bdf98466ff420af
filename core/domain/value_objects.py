"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum

from core.domain.exceptions import InvalidDomainError


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


@dataclass(frozen=True)
class ProductSlug(ValueObject):
    """Product slug value object."""

    value: str

    def __post_init__(self):
        """Validate slug format."""
        if not self.value:
            raise ValueError("Product slug cannot be empty")
        if not self.value.replace("-", "").replace("_", "").isalnum():
            raise ValueError(f"Invalid product slug format: {self.value}")

    def __str__(self) -> str:
        """Return slug as string."""
        return self.value


@dataclass(frozen=True)
class DomainName(ValueObject):
    """Site domain a license is activated on, normalised to lower case."""

    value: str

    def __post_init__(self):
        """Normalise and validate the domain."""
        normalized = (self.value or "").strip().lower()
        if not normalized:
            raise ValueError("Domain cannot be empty")
        if len(normalized) > 255:
            raise ValueError("Domain too long")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        """Return domain as string."""
        return self.value


class DomainClassification(Enum):
    """Whether a domain counts toward a license's activation cap."""

    PRODUCTION = "production"
    DEVELOPMENT = "development"

    @property
    def is_development(self) -> bool:
        return self is DomainClassification.DEVELOPMENT

    def __str__(self) -> str:
        """Return classification as string."""
        return self.value


class AuditAction(Enum):
    """Actions recorded in the audit log."""

    CREATED = "created"
    ACTIVATED = "activated"
    REACTIVATED = "reactivated"
    DEACTIVATED = "deactivated"
    UPDATED = "updated"
    DELETED = "deleted"

    def __str__(self) -> str:
        """Return action as string."""
        return self.value


def normalize_domain(value: str) -> str:
    """
    Normalise a site domain at an engine entry point.

    Raises:
        InvalidDomainError: If the domain is empty or longer than 255 characters
    """
    try:
        return str(DomainName(value))
    except ValueError as exc:
        raise InvalidDomainError(str(exc)) from exc
