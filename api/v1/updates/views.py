"""
Plugin update API views.

Called from the WordPress update hooks: the update transient filter
posts to /check, and the plugin details screen reads /info.
"""
import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.dependencies import get_update_service
from api.exceptions import error_body
from api.v1.updates.serializers import (
    ChangelogEntrySerializer,
    PluginInfoSerializer,
    UpdateCheckRequestSerializer,
    UpdateCheckSerializer,
)

logger = logging.getLogger(__name__)


class UpdateCheckView(APIView):
    """View for plugin update checks."""

    @extend_schema(
        operation_id="check_for_update",
        summary="Check For Update",
        description=(
            "Compare the installed version with the latest release. Works without a "
            "license; a signed download URL is included only when the license key is "
            "valid for the plugin and domain."
        ),
        tags=["Updates"],
        request=UpdateCheckRequestSerializer,
        responses={
            200: UpdateCheckSerializer,
            400: {"description": "Missing plugin slug"},
        },
    )
    def post(self, request: Request) -> Response:
        serializer = UpdateCheckRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        if not data.get("slug"):
            return Response(
                {"success": False, **error_body("missing_params", "slug is required")},
                status=status.HTTP_400_BAD_REQUEST,
            )

        result = get_update_service().check_for_update(
            data["slug"],
            current_version=data.get("version") or None,
            license_key=data.get("license_key") or None,
            domain=data.get("domain") or None,
        )
        return Response({"success": True, **UpdateCheckSerializer(result).data})


class PluginInfoView(APIView):
    """View for plugin details."""

    @extend_schema(
        operation_id="plugin_info",
        summary="Plugin Info",
        description="Plugin details in the format the WordPress plugins_api filter returns.",
        tags=["Updates"],
        responses={
            200: PluginInfoSerializer,
            404: {"description": "Plugin not found"},
        },
    )
    def get(self, request: Request, slug: str) -> Response:
        info = get_update_service().plugin_info(slug)
        return Response(PluginInfoSerializer(info).data)


class ChangelogView(APIView):
    """View for plugin release notes."""

    @extend_schema(
        operation_id="plugin_changelog",
        summary="Plugin Changelog",
        description="Release notes for a plugin, newest version first.",
        tags=["Updates"],
        responses={
            200: ChangelogEntrySerializer(many=True),
            404: {"description": "Plugin not found"},
        },
    )
    def get(self, request: Request, slug: str) -> Response:
        entries = get_update_service().changelog(slug)
        return Response(
            {
                "success": True,
                "slug": slug,
                "changelog": ChangelogEntrySerializer(entries, many=True).data,
            }
        )
