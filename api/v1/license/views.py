"""
License API views.

These endpoints are called by the WordPress plugin to:
- Activate a license on a site
- Deactivate it again
- Validate it
- Send periodic heartbeats
"""
import logging
from typing import Any, Dict

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.domain.activation import SiteInfo
from api.dependencies import client_ip, get_engine
from api.exceptions import error_body
from api.v1.license.serializers import (
    ActivationResultSerializer,
    DeactivationResultSerializer,
    HeartbeatResultSerializer,
    LicenseRequestSerializer,
    ValidationResultSerializer,
)

logger = logging.getLogger(__name__)

MISSING_PARAMS_MESSAGE = "license_key and domain are required"


def _status_for(ok: bool, error) -> int:
    """Map an engine outcome to an HTTP status."""
    if ok:
        return status.HTTP_200_OK
    if error == "invalid_key":
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


def _compact(data: Dict[str, Any], ok_field: str) -> Dict[str, Any]:
    """Drop empty fields from a failed outcome."""
    if data.get(ok_field):
        data.pop("activations", None)
        return data
    return {key: value for key, value in data.items() if value not in (None, [])}


def _parse(request: Request, ok_field: str):
    """
    Validate the request body.

    Returns:
        Tuple of (validated data, error response or None)
    """
    serializer = LicenseRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    if not data.get("license_key") or not data.get("domain"):
        body = {ok_field: False, **error_body("missing_params", MISSING_PARAMS_MESSAGE)}
        return data, Response(body, status=status.HTTP_400_BAD_REQUEST)
    return data, None


def _site_info(request: Request, data: Dict[str, Any]) -> SiteInfo:
    return SiteInfo(
        site_url=data.get("site_url") or None,
        wp_version=data.get("wp_version") or None,
        plugin_version=data.get("plugin_version") or None,
        ip_address=client_ip(request),
    )


class ActivateLicenseView(APIView):
    """View for activating a license on a domain."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Activate a license for a site domain. Production domains consume one of "
            "the license's activations; dev/staging domains are unlimited. Activating "
            "an already active domain refreshes it and returns a new token."
        ),
        tags=["License API"],
        request=LicenseRequestSerializer,
        responses={
            200: ActivationResultSerializer,
            400: {"description": "Missing parameters, expired license or limit reached"},
            404: {"description": "License key not found"},
        },
    )
    def post(self, request: Request) -> Response:
        data, error = _parse(request, "success")
        if error:
            return error

        result = get_engine().activate_license(
            data["license_key"], data["domain"], _site_info(request, data)
        )
        body = _compact(ActivationResultSerializer(result).data, "success")
        return Response(body, status=_status_for(result.success, result.error))


class DeactivateLicenseView(APIView):
    """View for releasing a domain's activation."""

    @extend_schema(
        operation_id="deactivate_license",
        summary="Deactivate License",
        description="Deactivate a license on a domain, freeing the activation.",
        tags=["License API"],
        request=LicenseRequestSerializer,
        responses={
            200: DeactivationResultSerializer,
            400: {"description": "Missing parameters or domain not activated"},
            404: {"description": "License key not found"},
        },
    )
    def post(self, request: Request) -> Response:
        data, error = _parse(request, "success")
        if error:
            return error

        result = get_engine().deactivate_license(
            data["license_key"], data["domain"], ip_address=client_ip(request)
        )
        body = _compact(DeactivationResultSerializer(result).data, "success")
        return Response(body, status=_status_for(result.success, result.error))


class ValidateLicenseView(APIView):
    """View for validating a license on a domain."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Check that a license is valid and activated for a domain. An optional "
            "activation token is checked against the key and domain."
        ),
        tags=["License API"],
        request=LicenseRequestSerializer,
        responses={
            200: ValidationResultSerializer,
            400: {"description": "License not valid for this domain"},
            404: {"description": "License key not found"},
        },
    )
    def post(self, request: Request) -> Response:
        data, error = _parse(request, "valid")
        if error:
            return error

        result = get_engine().validate_license(
            data["license_key"],
            data["domain"],
            token=data.get("token") or None,
            product_slug=data.get("product_slug") or None,
        )
        body = _compact(ValidationResultSerializer(result).data, "valid")
        return Response(body, status=_status_for(result.valid, result.error))


class HeartbeatView(APIView):
    """View for recording plugin heartbeats."""

    @extend_schema(
        operation_id="license_heartbeat",
        summary="Heartbeat",
        description="Record that an installation is alive and report current validity.",
        tags=["License API"],
        request=LicenseRequestSerializer,
        responses={
            200: HeartbeatResultSerializer,
            400: {"description": "Domain not activated"},
            404: {"description": "License key not found"},
        },
    )
    def post(self, request: Request) -> Response:
        data, error = _parse(request, "success")
        if error:
            return error

        result = get_engine().record_heartbeat(
            data["license_key"], data["domain"], _site_info(request, data)
        )
        body = _compact(HeartbeatResultSerializer(result).data, "success")
        return Response(body, status=_status_for(result.success, result.error))


class LicenseStatusView(APIView):
    """Quick status check authenticated by the X-License-Key header."""

    @extend_schema(
        operation_id="license_status",
        summary="License Status",
        description="Same checks as validate, for clients that prefer a GET.",
        tags=["License API"],
        parameters=[
            OpenApiParameter(
                name="X-License-Key",
                type=str,
                location=OpenApiParameter.HEADER,
                required=True,
                description="License key",
            ),
            OpenApiParameter(
                name="domain",
                type=str,
                location=OpenApiParameter.QUERY,
                required=True,
                description="Site domain",
            ),
        ],
        responses={
            200: ValidationResultSerializer,
            400: {"description": "Missing domain or license not valid"},
            401: {"description": "Missing X-License-Key header"},
            404: {"description": "License key not found"},
        },
    )
    def get(self, request: Request) -> Response:
        license_key = request.headers.get("X-License-Key")
        if not license_key:
            return Response(
                {"valid": False, **error_body("missing_key", "X-License-Key header required")},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        domain = request.query_params.get("domain")
        if not domain:
            return Response(
                {
                    "valid": False,
                    **error_body("missing_domain", "domain query parameter required"),
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        result = get_engine().validate_license(license_key, domain)
        body = _compact(ValidationResultSerializer(result).data, "valid")
        return Response(body, status=_status_for(result.valid, result.error))
