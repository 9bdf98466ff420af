"""
Dependency lookup for API views.
"""
from django.apps import apps


def get_engine():
    """
    Return the license engine built at startup.

    See LicenseServer.apps.LicenseServerConfig.ready().
    """
    return apps.get_app_config("LicenseServer").engine


def client_ip(request) -> str:
    """Best-effort client IP, honouring the first X-Forwarded-For hop."""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")


def get_update_service():
    """Build the plugin update service on top of the shared engine."""
    from django.conf import settings

    from products.application.services.update_service import UpdateService
    from products.infrastructure.download_links import DownloadLinkSigner

    return UpdateService(
        get_engine(),
        DownloadLinkSigner(
            settings.LICENSE_JWT_SECRET, ttl_seconds=settings.DOWNLOAD_LINK_TTL_SECONDS
        ),
    )
