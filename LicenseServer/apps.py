"""
App configuration for License Server.
"""
import atexit
import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class LicenseServerConfig(AppConfig):
    """App configuration for LicenseServer.

    Builds the persistence store and the license engine once all models
    are loaded, so request handlers share a single explicitly constructed
    engine instead of reaching for module-level state. The store is closed
    at interpreter exit.
    """

    name = "LicenseServer"
    verbose_name = "License Server"

    store = None
    engine = None

    def ready(self):
        """Called when Django starts."""
        from django.conf import settings

        from core.infrastructure.store import DjangoStore
        from licenses.application.engine import LicenseEngine
        from licenses.infrastructure.tokens import JWTTokenIssuer

        self.store = DjangoStore()
        self.engine = LicenseEngine(
            store=self.store,
            token_issuer=JWTTokenIssuer(
                secret=settings.LICENSE_JWT_SECRET,
                default_ttl_days=settings.LICENSE_TOKEN_DEFAULT_TTL_DAYS,
            ),
            key_prefix=settings.LICENSE_KEY_PREFIX,
            max_key_attempts=settings.LICENSE_KEY_MAX_ATTEMPTS,
        )
        logger.info("License engine ready", extra={"key_prefix": settings.LICENSE_KEY_PREFIX})
        atexit.register(self.shutdown)

    def shutdown(self):
        """Close the engine's store when the process exits."""
        if self.engine is not None:
            self.engine.close()
