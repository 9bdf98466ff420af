"""
Admin API key authentication middleware.

This middleware protects the admin API with the shared ADMIN_API_KEY.
Public license endpoints are authenticated by the license key itself.
"""

import hmac
import logging
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

ADMIN_API_PREFIX = "/api/v1/admin/"


class AdminAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for admin API authentication.

    This middleware:
    1. Reads the key from ``Authorization: Bearer <key>`` or ``X-API-Key``
    2. Returns 401 Unauthorized if no key was sent
    3. Returns 403 Forbidden if the key is wrong
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401/403 if authentication fails, None otherwise
        """
        if not request.path.startswith(ADMIN_API_PREFIX):
            return None

        api_key = self._extract_key(request)
        if not api_key:
            return JsonResponse(
                {
                    "error": "unauthorized",
                    "message": "Missing authorization header. Provide Bearer token or X-API-Key.",
                },
                status=401,
            )

        expected = settings.ADMIN_API_KEY
        if not expected or not hmac.compare_digest(api_key.encode(), expected.encode()):
            logger.warning(
                "Invalid admin key attempted",
                extra={"path": request.path, "key_prefix": api_key[:4]},
            )
            return JsonResponse(
                {"error": "forbidden", "message": "Invalid admin key"},
                status=403,
            )

        request.is_admin = True
        return None

    def _extract_key(self, request: HttpRequest) -> str:
        authorization = request.headers.get("Authorization", "")
        if authorization.startswith("Bearer "):
            return authorization[len("Bearer ") :].strip()
        return request.headers.get("X-API-Key", "").strip()
