"""
Celery tasks for the licenses app.

Tasks for delivering license keys to customers.
"""
import logging
from typing import Optional

from django.conf import settings
from django.core.mail import send_mail

from LicenseServer.celery import app

logger = logging.getLogger(__name__)


def render_license_email(
    license_key: str, product_name: str, license_type: Optional[str]
) -> tuple:
    """
    Build subject and plain-text body of the license delivery email.

    Returns:
        Tuple of (subject, body)
    """
    type_label = "Lifetime License" if license_type in (None, "lifetime") else "Annual License"
    subject = f"Your {product_name} License Key"
    body = (
        f"Thank you for your purchase!\n\n"
        f"Your license for {product_name} is ready to use.\n\n"
        f"License key: {license_key}\n"
        f"License type: {type_label}\n\n"
        f"To activate, open the plugin settings in your WordPress admin and paste the key.\n"
        f"Development and staging sites do not count toward your activation limit.\n"
    )
    return subject, body


@app.task(bind=True, max_retries=3)
def send_license_email(
    self,
    email: str,
    license_key: str,
    product_name: str,
    license_type: Optional[str] = None,
):
    """
    Celery task for license delivery email.

    Args:
        email: Recipient
        license_key: Issued key
        product_name: Product display name
        license_type: lifetime or annual
    """
    subject, body = render_license_email(license_key, product_name, license_type)
    try:
        send_mail(subject, body, settings.LICENSE_EMAIL_FROM, [email], fail_silently=False)
    except OSError as exc:
        logger.error("License email failed: %s", exc, extra={"recipient": email}, exc_info=True)
        raise self.retry(exc=exc, countdown=2**self.request.retries)

    logger.info("License email sent", extra={"recipient": email})
