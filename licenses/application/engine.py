"""
License engine.

Single entry point for every license operation. The HTTP layer, the
webhook handler and the management commands all go through it.

Domain failures come back as tagged results. Database failures are
raised as StoreUnavailableError, the only error that leaves the engine.
"""
import functools
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from django.db import DatabaseError

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.commands.deactivate_license import DeactivateLicenseCommand
from activations.application.commands.record_heartbeat import RecordHeartbeatCommand
from activations.application.dto.activation_dto import (
    ActivationResult,
    DeactivationResult,
    HeartbeatResult,
)
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.application.handlers.deactivate_license_handler import (
    DeactivateLicenseHandler,
)
from activations.application.handlers.record_heartbeat_handler import RecordHeartbeatHandler
from activations.domain.activation import SiteInfo
from core.domain.exceptions import StoreUnavailableError
from licenses.application.commands.admin_license_commands import (
    DeleteLicenseCommand,
    UpdateLicenseCommand,
)
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.dto.license_dto import (
    CreateLicenseResult,
    LicenseDTO,
    LicenseStatsDTO,
    ValidationResult,
)
from licenses.application.handlers.admin_license_handlers import (
    DeleteLicenseHandler,
    GetLicenseHandler,
    LicenseStatsHandler,
    ListLicensesHandler,
    UpdateLicenseHandler,
)
from licenses.application.handlers.create_license_handler import CreateLicenseHandler
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.application.services.audit_recorder import AuditRecorder
from licenses.domain.license import DEFAULT_PLAN, LicenseMetadata
from licenses.ports.token_issuer import TokenIssuer
from products.application.commands.product_commands import (
    CreateProductCommand,
    DeactivateProductCommand,
    UpdateProductCommand,
)
from products.application.dto.product_dto import ProductDTO
from products.application.handlers.product_handlers import (
    CreateProductHandler,
    DeactivateProductHandler,
    GetProductHandler,
    ListProductsHandler,
    UpdateProductHandler,
)

logger = logging.getLogger(__name__)


def _store_guard(method):
    """Report database failures as StoreUnavailableError."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except DatabaseError as exc:
            logger.error(
                "License store unavailable",
                extra={"operation": method.__name__, "error": str(exc)},
                exc_info=True,
            )
            raise StoreUnavailableError() from exc

    return wrapper


class LicenseEngine:
    """
    Facade over the license and activation handlers.

    Holds no mutable state of its own; the store is the only shared
    resource, so one engine serves every request worker.
    """

    def __init__(
        self,
        store,
        token_issuer: TokenIssuer,
        key_prefix: str = "TLAT",
        max_key_attempts: int = 5,
    ):
        """
        Initialize engine.

        Args:
            store: Persistence store (see core.infrastructure.store.DjangoStore)
            token_issuer: Issuer for activation tokens
            key_prefix: Prefix of generated license keys
            max_key_attempts: Key generation attempts before giving up
        """
        self.store = store
        self.token_issuer = token_issuer
        self.audit_recorder = AuditRecorder(store.audit)

        self._create = CreateLicenseHandler(
            store, self.audit_recorder, key_prefix=key_prefix, max_key_attempts=max_key_attempts
        )
        self._activate = ActivateLicenseHandler(store, token_issuer, self.audit_recorder)
        self._deactivate = DeactivateLicenseHandler(store, self.audit_recorder)
        self._validate = ValidateLicenseHandler(store, token_issuer)
        self._heartbeat = RecordHeartbeatHandler(store)

    # License operations

    @_store_guard
    def create_license(
        self,
        email: str,
        plan: str = DEFAULT_PLAN,
        max_activations: int = 1,
        expires_at: Optional[datetime] = None,
        product_id: Optional[uuid.UUID] = None,
        metadata: Union[LicenseMetadata, Dict[str, Any], None] = None,
    ) -> CreateLicenseResult:
        """
        Issue a new license.

        Args:
            email: Owner email
            plan: Plan tag
            max_activations: Production activation cap
            expires_at: Optional expiry; None means perpetual
            product_id: Optional product to bind the license to
            metadata: Provenance, typed or as a plain dict

        Returns:
            CreateLicenseResult
        """
        if isinstance(metadata, dict):
            metadata = LicenseMetadata.from_dict(metadata)
        return self._create.handle(
            CreateLicenseCommand(
                email=email,
                plan=plan,
                max_activations=max_activations,
                expires_at=expires_at,
                product_id=product_id,
                metadata=metadata,
            )
        )

    @_store_guard
    def activate_license(
        self, license_key: str, domain: str, site_info: Optional[SiteInfo] = None
    ) -> ActivationResult:
        return self._activate.handle(
            ActivateLicenseCommand(
                license_key=license_key, domain=domain, site_info=site_info or SiteInfo()
            )
        )

    @_store_guard
    def deactivate_license(
        self, license_key: str, domain: str, ip_address: Optional[str] = None
    ) -> DeactivationResult:
        return self._deactivate.handle(
            DeactivateLicenseCommand(license_key=license_key, domain=domain, ip_address=ip_address)
        )

    @_store_guard
    def validate_license(
        self,
        license_key: str,
        domain: str,
        token: Optional[str] = None,
        product_slug: Optional[str] = None,
    ) -> ValidationResult:
        return self._validate.handle(
            ValidateLicenseCommand(
                license_key=license_key, domain=domain, token=token, product_slug=product_slug
            )
        )

    @_store_guard
    def record_heartbeat(
        self, license_key: str, domain: str, site_info: Optional[SiteInfo] = None
    ) -> HeartbeatResult:
        return self._heartbeat.handle(
            RecordHeartbeatCommand(
                license_key=license_key, domain=domain, site_info=site_info or SiteInfo()
            )
        )

    # Admin operations

    @_store_guard
    def get_license(self, license_key: str) -> LicenseDTO:
        return GetLicenseHandler(self.store).handle(license_key)

    @_store_guard
    def find_license_by_checkout_session(self, session_id: str) -> Optional[LicenseDTO]:
        """Return the license already issued for a checkout session, if any."""
        license = self.store.licenses.find_by_checkout_session(session_id)
        return LicenseDTO.from_entity(license) if license else None

    @_store_guard
    def list_licenses(
        self,
        email: Optional[str] = None,
        plan: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[LicenseDTO]:
        return ListLicensesHandler(self.store).handle(
            ListLicensesQuery(email=email, plan=plan, limit=limit, offset=offset)
        )

    @_store_guard
    def update_license(
        self, license_key: str, changes: Dict[str, Any], ip_address: Optional[str] = None
    ) -> LicenseDTO:
        return UpdateLicenseHandler(self.store, self.audit_recorder).handle(
            UpdateLicenseCommand(license_key=license_key, changes=changes, ip_address=ip_address)
        )

    @_store_guard
    def delete_license(self, license_key: str, ip_address: Optional[str] = None) -> None:
        DeleteLicenseHandler(self.store, self.audit_recorder).handle(
            DeleteLicenseCommand(license_key=license_key, ip_address=ip_address)
        )

    @_store_guard
    def stats(self) -> LicenseStatsDTO:
        return LicenseStatsHandler(self.store).handle()

    # Product catalogue

    @_store_guard
    def create_product(self, command: CreateProductCommand) -> ProductDTO:
        return CreateProductHandler(self.store.products).handle(command)

    @_store_guard
    def list_products(self, include_inactive: bool = False) -> List[ProductDTO]:
        return ListProductsHandler(self.store.products).handle(include_inactive)

    @_store_guard
    def get_product(self, product_id: uuid.UUID) -> ProductDTO:
        return GetProductHandler(self.store.products).handle(product_id)

    @_store_guard
    def update_product(self, command: UpdateProductCommand) -> ProductDTO:
        return UpdateProductHandler(self.store.products).handle(command)

    @_store_guard
    def deactivate_product(self, product_id: uuid.UUID) -> ProductDTO:
        return DeactivateProductHandler(self.store.products).handle(
            DeactivateProductCommand(product_id=product_id)
        )

    @_store_guard
    def find_product_by_slug(self, slug: str) -> Optional[ProductDTO]:
        product = self.store.products.find_by_slug(slug)
        return GetProductHandler(self.store.products).handle(product.id) if product else None

    def close(self) -> None:
        """Release the store's connections."""
        self.store.close()
