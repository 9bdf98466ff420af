"""
Outcome kinds returned by license engine operations.

Every engine operation reports failures through its own closed set of
tags. The string values are the stable ``error`` codes seen by clients.
"""
from enum import Enum


class OutcomeError(str, Enum):
    """Base for per-operation error tags."""

    def __str__(self) -> str:
        return self.value


class ActivationError(OutcomeError):
    INVALID_KEY = "invalid_key"
    INVALID_DOMAIN = "invalid_domain"
    EXPIRED = "expired"
    LIMIT_REACHED = "limit_reached"


class DeactivationError(OutcomeError):
    INVALID_KEY = "invalid_key"
    INVALID_DOMAIN = "invalid_domain"
    NOT_FOUND = "not_found"


class ValidationError(OutcomeError):
    INVALID_KEY = "invalid_key"
    INVALID_DOMAIN = "invalid_domain"
    PRODUCT_MISMATCH = "product_mismatch"
    EXPIRED = "expired"
    NOT_ACTIVATED = "not_activated"
    TOKEN_MISMATCH = "token_mismatch"
    INVALID_TOKEN = "invalid_token"
    TOKEN_EXPIRED = "token_expired"


class HeartbeatError(OutcomeError):
    INVALID_KEY = "invalid_key"
    INVALID_DOMAIN = "invalid_domain"
    NOT_ACTIVATED = "not_activated"
