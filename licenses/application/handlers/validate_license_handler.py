"""
ValidateLicenseHandler.

Handler for checking a license against a domain.
"""
import logging

from activations.domain.services import SeatManager
from core.domain.exceptions import (
    InvalidDomainError,
    LicenseExpiredError,
    LicenseNotFoundError,
    NotActivatedError,
    ProductMismatchError,
    TokenException,
    TokenMismatchError,
)
from core.domain.outcomes import ValidationError
from core.domain.value_objects import normalize_domain
from core.metrics import license_validations_total
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.dto.license_dto import (
    LicenseSummaryDTO,
    ProductSummaryDTO,
    ValidatedActivationDTO,
    ValidationResult,
)
from licenses.ports.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)


class ValidateLicenseHandler:
    """
    Handler for ValidateLicenseCommand.

    Checks run in a fixed order: key, product, expiry, activation, token.
    A token only proves which key and domain it was issued for; stored
    state is always checked first.
    """

    def __init__(self, store, token_issuer: TokenIssuer):
        """Initialize handler with store and token issuer."""
        self.store = store
        self.token_issuer = token_issuer

    def handle(self, command: ValidateLicenseCommand) -> ValidationResult:
        """
        Handle validate license command.

        Args:
            command: ValidateLicenseCommand

        Returns:
            ValidationResult with license, product and activation summaries
            when valid
        """
        try:
            result = self._validate(command)
        except LicenseExpiredError as exc:
            license_validations_total.labels(outcome=exc.code).inc()
            return ValidationResult.failure(
                ValidationError.EXPIRED, exc.message, expired_at=exc.expired_at
            )
        except (
            InvalidDomainError,
            LicenseNotFoundError,
            ProductMismatchError,
            NotActivatedError,
            TokenException,
        ) as exc:
            license_validations_total.labels(outcome=exc.code).inc()
            return ValidationResult.failure(ValidationError(exc.code), exc.message)

        license_validations_total.labels(outcome="valid").inc()
        return result

    def _validate(self, command: ValidateLicenseCommand) -> ValidationResult:
        domain = normalize_domain(command.domain)

        license = self.store.licenses.find_by_key(command.license_key)
        if not license:
            raise LicenseNotFoundError()

        product = None
        if license.product_id:
            product = self.store.products.find_by_id(license.product_id)
        if command.product_slug and product and str(product.slug) != command.product_slug:
            raise ProductMismatchError(
                f"License is for {product.name}, not {command.product_slug}"
            )

        if license.is_expired():
            raise LicenseExpiredError(expired_at=license.expires_at)

        active = self.store.activations.find_active_by_license(license.id)
        activation = SeatManager.find_active(active, domain)
        if activation is None:
            raise NotActivatedError()

        if command.token:
            claims = self.token_issuer.verify(command.token)
            if not claims.matches(license.license_key, domain):
                logger.info(
                    "Token presented for another license or domain",
                    extra={"license_id": str(license.id), "domain": domain},
                )
                raise TokenMismatchError()

        usage = SeatManager.usage(active)
        return ValidationResult(
            valid=True,
            message="License is valid",
            license=LicenseSummaryDTO(
                plan=license.plan,
                email=str(license.email),
                expires_at=license.expires_at,
                max_activations=license.max_activations,
                current_activations=usage.total,
                production_activations=usage.production,
                dev_activations=usage.development,
            ),
            product=ProductSummaryDTO(
                slug=str(product.slug),
                name=product.name,
                latest_version=product.current_version,
            )
            if product
            else None,
            activation=ValidatedActivationDTO(
                domain=activation.domain,
                activated_at=activation.activated_at,
            ),
        )
