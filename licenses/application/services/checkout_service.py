"""
Checkout service.

Turns a completed payment checkout into a license and queues the
delivery email. Providers redeliver events until they get a 2xx, so a
session that already has a license is answered with that license.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from django.db import transaction
from kombu.exceptions import KombuError

from licenses.application.dto.license_dto import CreateLicenseResult
from licenses.domain.license import LicenseMetadata

logger = logging.getLogger(__name__)

LIFETIME = "lifetime"
ANNUAL = "annual"


def expiry_for(license_type: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Expiry for a purchased license type.

    Args:
        license_type: lifetime or annual
        now: Purchase time (defaults to now, UTC)

    Returns:
        One year out for annual licenses, None otherwise
    """
    if license_type != ANNUAL:
        return None
    now = now or datetime.now(timezone.utc)
    try:
        return now.replace(year=now.year + 1)
    except ValueError:
        # 29 February
        return now + timedelta(days=365)


class CheckoutService:
    """Service for handling completed checkout sessions."""

    def __init__(
        self,
        engine,
        default_product_slug: str,
        send_email,
        on_commit: Callable[[Callable[[], None]], None] = transaction.on_commit,
    ):
        """
        Initialize service.

        Args:
            engine: LicenseEngine
            default_product_slug: Product used when the session names none
            send_email: Celery task used to deliver the license key
            on_commit: Hook that runs a callback once the license is committed
        """
        self.engine = engine
        self.default_product_slug = default_product_slug
        self.send_email = send_email
        self.on_commit = on_commit

    def handle_checkout_completed(self, session: Dict[str, Any]) -> Optional[CreateLicenseResult]:
        """
        Create a license for a completed checkout session.

        Sessions without a customer email or for an unknown product are
        logged and skipped, so the provider does not keep retrying them.
        A session seen before returns its existing license and sends no
        second email.

        Args:
            session: The checkout session object from the event

        Returns:
            CreateLicenseResult, or None if the session was skipped
        """
        session_id = session.get("id")
        if session_id:
            existing = self.engine.find_license_by_checkout_session(session_id)
            if existing:
                logger.info(
                    "Checkout session already has a license",
                    extra={"license_id": str(existing.id), "session_id": session_id},
                )
                return CreateLicenseResult(
                    success=True, message="License already issued", license=existing
                )

        customer_details = session.get("customer_details") or {}
        email = session.get("customer_email") or customer_details.get("email")
        if not email:
            logger.error("No customer email in session", extra={"session_id": session_id})
            return None

        metadata = session.get("metadata") or {}
        product_slug = metadata.get("product_slug") or self.default_product_slug
        license_type = metadata.get("license_type") or LIFETIME

        product = self.engine.find_product_by_slug(product_slug)
        if not product:
            logger.error("Product not found for checkout", extra={"product_slug": product_slug})
            return None

        result = self.engine.create_license(
            email=email,
            max_activations=1,
            expires_at=expiry_for(license_type),
            product_id=product.id,
            metadata=LicenseMetadata(
                source="stripe",
                stripe_session_id=session_id,
                stripe_customer_id=session.get("customer"),
                license_type=license_type,
            ),
        )
        logger.info(
            "License created from checkout",
            extra={"license_id": str(result.license.id), "session_id": session_id},
        )

        license_key = result.license.license_key
        self.on_commit(
            lambda: self._queue_email(email, license_key, product.name, license_type)
        )
        return result

    def _queue_email(
        self, email: str, license_key: str, product_name: str, license_type: str
    ) -> None:
        """Queue the delivery email; the license stands even if the broker is down."""
        try:
            self.send_email.delay(
                email=email,
                license_key=license_key,
                product_name=product_name,
                license_type=license_type,
            )
        except (KombuError, OSError) as exc:
            logger.error(
                "Could not queue license email: %s",
                exc,
                extra={"recipient": email, "license_key": license_key[:9]},
                exc_info=True,
            )
