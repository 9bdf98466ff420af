"""
Observability middleware.

Correlation IDs and one structured log line per request. License keys
are never logged in full; only the first key segment is kept.
"""

import logging
import time
import uuid
from typing import Any, Callable, Dict, Optional

from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Health checks hit these every few seconds
QUIET_PREFIXES = ("/health", "/ready", "/metrics")


def mask_license_key(license_key: Optional[str]) -> Optional[str]:
    """
    Keep the prefix and first segment of a key, e.g. ``TLAT-AB12-****``.

    Args:
        license_key: Raw key as sent by the client

    Returns:
        Masked key, or None if no key was sent
    """
    if not license_key:
        return None
    parts = license_key.split("-")
    return "-".join(parts[:2] + ["****"])


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    Sets ``request.correlation_id`` from the caller's X-Correlation-ID
    (or a fresh UUID) and echoes it back with the request duration.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore

        start = time.monotonic()
        try:
            response = self.get_response(request)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.error(
                "Request failed",
                extra={
                    **self._request_fields(request),
                    "error_type": type(exc).__name__,
                    "duration_ms": round((time.monotonic() - start) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        duration = time.monotonic() - start
        self._log_response(request, response, duration)

        response[CORRELATION_HEADER] = correlation_id
        response["X-Request-Duration"] = f"{duration:.3f}"
        return response

    def _request_fields(self, request: HttpRequest) -> Dict[str, Any]:
        fields = {
            "correlation_id": request.correlation_id,  # type: ignore
            "method": request.method,
            "path": request.path,
            "remote_addr": request.META.get("REMOTE_ADDR"),
        }
        masked = mask_license_key(request.GET.get("license_key"))
        if masked:
            fields["license_key"] = masked
        return fields

    def _log_response(self, request: HttpRequest, response: HttpResponse, duration: float):
        log_extra = {
            **self._request_fields(request),
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
        }

        if response.status_code >= 500:
            logger.error("Request completed with server error", extra=log_extra)
        elif response.status_code >= 400:
            logger.warning("Request completed with client error", extra=log_extra)
        elif request.path.startswith(QUIET_PREFIXES):
            logger.debug("Health check request completed", extra=log_extra)
        else:
            logger.info("Request completed", extra=log_extra)
