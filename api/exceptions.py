"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every error body has the same flat shape: ``{"error": <tag>, "message": ...}``.
"""

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    DomainException,
    DuplicateProductSlugError,
    LicenseNotFoundError,
    ProductNotFoundError,
    StoreUnavailableError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)


def error_body(error: str, message: str, **extra) -> Dict[str, Any]:
    """Build the flat error payload shared by views and middleware."""
    return {"error": error, "message": message, **extra}


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    correlation_id = _get_correlation_id(context)
    endpoint = _get_endpoint(context)

    if isinstance(exc, StoreUnavailableError):
        errors_total.labels(error_type="store_unavailable", endpoint=endpoint).inc()
        logger.error(
            "Store unavailable: %s", exc.message, extra={"correlation_id": correlation_id}
        )
        response = Response(
            error_body(exc.code, exc.message), status=status.HTTP_503_SERVICE_UNAVAILABLE
        )
        response["Retry-After"] = "5"
        return response

    if isinstance(exc, DomainException):
        return _handle_domain_exception(exc, correlation_id)

    if isinstance(exc, DRFValidationError):
        return Response(
            error_body("validation_error", "Invalid request", details=exc.detail),
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, (ValueError, DjangoValidationError)):
        message = exc.messages[0] if isinstance(exc, DjangoValidationError) else str(exc)
        return Response(
            error_body("validation_error", message), status=status.HTTP_400_BAD_REQUEST
        )

    if isinstance(exc, APIException):
        response = exception_handler(exc, context)
        if response is not None:
            response.data = error_body(exc.default_code, str(exc.detail))
            return response

    if isinstance(exc, Http404):
        return Response(
            error_body("not_found", "Resource not found"), status=status.HTTP_404_NOT_FOUND
        )

    return _handle_unexpected_exception(exc, endpoint, correlation_id)


def _get_correlation_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract correlation ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "correlation_id", None)


def _get_endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request else "unknown"


def _handle_domain_exception(exc: DomainException, correlation_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, (LicenseNotFoundError, ProductNotFoundError)):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, DuplicateProductSlugError):
        status_code = status.HTTP_409_CONFLICT

    logger.warning(
        "Domain exception: %s - %s", exc.code, exc.message, extra={"correlation_id": correlation_id}
    )
    return Response(error_body(exc.code, exc.message), status=status_code)


def _handle_unexpected_exception(
    exc: Exception, endpoint: str, correlation_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    errors_total.labels(error_type=type(exc).__name__, endpoint=endpoint).inc()
    logger.error(
        "Unexpected error: %s", exc, extra={"correlation_id": correlation_id}, exc_info=True
    )
    message = str(exc) if settings.DEBUG else "An internal error occurred"
    return Response(
        error_body("internal_error", message), status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
