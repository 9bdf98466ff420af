"""
Rate limiting middleware.

Implements tiered rate limiting per client IP, and per IP and site domain
on the license endpoints, with counters stored in the Django cache.
"""

import hashlib
import json
import time
from typing import Callable, Optional, Tuple

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.metrics import errors_total

EXEMPT_PREFIXES = (
    "/health",
    "/ready",
    "/metrics",
    "/admin/",
    "/api/docs",
    "/api/redoc",
    "/api/schema",
)

ACTIVATION_PATHS = ("/api/v1/license/activate",)
VALIDATION_PATHS = (
    "/api/v1/license/validate",
    "/api/v1/license/heartbeat",
    "/api/v1/license/status",
    "/api/v1/update/check",
)
ADMIN_PREFIX = "/api/v1/admin/"

TIER_MESSAGES = {
    "activation": (
        "activation_rate_limited",
        "Too many activation attempts. Please wait before trying again.",
    ),
    "validation": ("validation_rate_limited", "Too many validation requests. Please slow down."),
    "admin": ("admin_rate_limited", "Too many admin requests. Please try again later."),
    "general": ("rate_limited", "Too many requests, please try again later"),
}


def normalize_ip(ip: Optional[str]) -> str:
    """
    Normalize a client IP for use in a rate limit key.

    IPv4-mapped IPv6 addresses become plain IPv4. Other IPv6 addresses are
    cut to their /64 network prefix so one host cannot rotate addresses.
    """
    if not ip:
        return "unknown"
    if ip.startswith("::ffff:"):
        return ip[len("::ffff:") :]
    if ":" in ip:
        return ":".join(ip.split(":")[:4])
    return ip


class RateLimitMiddleware:
    """
    Tiered rate limiting middleware.

    Tiers and their limits come from settings.RATE_LIMITS as
    ``{tier: (requests, window seconds)}``:
    - activation: per IP and domain
    - validation: per IP and domain (validate, heartbeat, status, update check)
    - admin: per IP
    - general: per IP, everything else under /api/
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def _get_client_ip(self, request: HttpRequest) -> str:
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
        if forwarded:
            return normalize_ip(forwarded.split(",")[0].strip())
        return normalize_ip(request.META.get("REMOTE_ADDR"))

    def _get_domain(self, request: HttpRequest) -> str:
        """
        Site domain from the query string or the JSON body.

        Reading ``request.body`` here caches it, so views can still parse it.
        """
        domain = request.GET.get("domain")
        if domain:
            return domain.strip().lower()
        if request.method == "POST" and request.content_type == "application/json":
            try:
                body = json.loads(request.body or b"{}")
            except ValueError:
                return "unknown"
            if isinstance(body, dict) and body.get("domain"):
                return str(body["domain"]).strip().lower()
        return "unknown"

    def _classify(self, request: HttpRequest) -> Optional[Tuple[str, str]]:
        """
        Pick the tier and the identity counted against it.

        Returns:
            Tuple of (tier, identity) or None if the path is not limited
        """
        path = request.path
        if path.startswith(EXEMPT_PREFIXES) or not path.startswith("/api/"):
            return None

        ip = self._get_client_ip(request)
        if path.startswith(ACTIVATION_PATHS):
            return "activation", f"{ip}-{self._get_domain(request)}"
        if path.startswith(VALIDATION_PATHS):
            return "validation", f"{ip}-{self._get_domain(request)}"
        if path.startswith(ADMIN_PREFIX):
            return "admin", ip
        return "general", ip

    def _get_rate_limit_key(self, tier: str, identity: str, window_start: int) -> str:
        """
        Generate cache key for rate limiting.

        Args:
            tier: Rate limit tier
            identity: IP, or IP and domain
            window_start: Index of the current window

        Returns:
            Cache key string
        """
        identity_hash = hashlib.sha256(identity.encode()).hexdigest()[:16]
        return f"rate_limit:{tier}:{identity_hash}:{window_start}"

    def _check_rate_limit(
        self, tier: str, identity: str, limit: int, window: int
    ) -> Tuple[bool, int, int]:
        """
        Check if request is within rate limit.

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        window_start = int(time.time() / window)
        reset_time = (window_start + 1) * window
        full_key = self._get_rate_limit_key(tier, identity, window_start)

        current_count = cache.get(full_key, 0)
        if current_count >= limit:
            return False, 0, reset_time

        try:
            new_count = cache.incr(full_key, 1)
        except ValueError:
            # Key doesn't exist, create it with initial value of 1
            cache.set(full_key, 1, timeout=window)
            new_count = 1

        return True, max(0, limit - new_count), reset_time

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response with rate limit headers
        """
        if not getattr(settings, "RATE_LIMIT_ENABLED", True):
            return self.get_response(request)

        classified = self._classify(request)
        if classified is None:
            return self.get_response(request)

        tier, identity = classified
        limit, window = settings.RATE_LIMITS[tier]
        is_allowed, remaining, reset_time = self._check_rate_limit(tier, identity, limit, window)
        retry_after = max(0, reset_time - int(time.time()))

        if not is_allowed:
            errors_total.labels(error_type="rate_limit_exceeded", endpoint=request.path).inc()
            error, message = TIER_MESSAGES[tier]
            response = JsonResponse(
                {"error": error, "message": message, "retry_after": retry_after},
                status=429,
            )
            response["Retry-After"] = str(retry_after)
        else:
            response = self.get_response(request)

        # Add rate limit headers
        response["X-RateLimit-Limit"] = str(limit)
        response["X-RateLimit-Remaining"] = str(remaining)
        response["X-RateLimit-Reset"] = str(reset_time)

        return response
