"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Each carries the stable
outcome tag that callers see in the ``error`` field.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license key does not match any license."""

    def __init__(self, message: str = "License key not found"):
        super().__init__(message, code="invalid_key")


class LicenseExpiredError(LicenseException):
    """Raised when a license has expired."""

    def __init__(self, message: str = "License has expired", expired_at=None):
        super().__init__(message, code="expired")
        self.expired_at = expired_at


class ProductMismatchError(LicenseException):
    """Raised when a license is bound to a different product."""

    def __init__(self, message: str = "License is for a different product"):
        super().__init__(message, code="product_mismatch")


class LicenseKeyConflictError(LicenseException):
    """Raised when a generated license key already exists."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="conflict")


class ActivationException(DomainException):
    """Base exception for activation-related errors."""

    pass


class ActivationNotFoundError(ActivationException):
    """Raised when no active activation matches a domain on deactivation."""

    def __init__(self, message: str = "No active activation found for this domain"):
        super().__init__(message, code="not_found")


class NotActivatedError(ActivationException):
    """Raised when a license is not active on the requested domain."""

    def __init__(self, message: str = "License not activated for this domain"):
        super().__init__(message, code="not_activated")


class ActivationLimitReachedError(ActivationException):
    """Raised when the production activation cap is exhausted."""

    def __init__(self, max_activations: int):
        super().__init__(
            f"Maximum production activations ({max_activations}) reached. "
            "Dev/staging environments are unlimited.",
            code="limit_reached",
        )
        self.max_activations = max_activations


class DuplicateActivationError(ActivationException):
    """Raised when a (license, domain) row was inserted by another request."""

    def __init__(self, message: str = "Activation already exists for this domain"):
        super().__init__(message, code="conflict")


class InvalidDomainError(ActivationException):
    """Raised when a site domain is empty or too long."""

    def __init__(self, message: str = "Invalid domain"):
        super().__init__(message, code="invalid_domain")


class TokenException(DomainException):
    """Base exception for activation token errors."""

    pass


class InvalidTokenError(TokenException):
    """Raised when a token is malformed or its signature does not verify."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, code="invalid_token")


class TokenExpiredError(TokenException):
    """Raised when a token is well-formed but past its expiry."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, code="token_expired")


class TokenMismatchError(TokenException):
    """Raised when a token was issued for another license or domain."""

    def __init__(self, message: str = "Token does not match domain/license"):
        super().__init__(message, code="token_mismatch")


class ProductException(DomainException):
    """Base exception for product-related errors."""

    pass


class ProductNotFoundError(ProductException):
    """Raised when a product is not found."""

    def __init__(self, message: str = "Product not found"):
        super().__init__(message, code="not_found")


class DuplicateProductSlugError(ProductException):
    """Raised when a product slug is already taken."""

    def __init__(self, message: str = "A product with this slug already exists"):
        super().__init__(message, code="duplicate_slug")


class StoreUnavailableError(Exception):
    """Raised when the persistence store cannot serve a request.

    This is the only failure that crosses the engine boundary.
    """

    def __init__(self, message: str = "License store is unavailable"):
        super().__init__(message)
        self.message = message
        self.code = "store_unavailable"
