"""
Serializers for the plugin update API.
"""

from rest_framework import serializers


class UpdateCheckRequestSerializer(serializers.Serializer):
    """
    Body sent by the plugin's update hook.

    wp_version and php_version are accepted for the request log only.
    """

    slug = serializers.CharField(required=False, allow_blank=True, max_length=100)
    version = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=50
    )
    license_key = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=100
    )
    domain = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )
    wp_version = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=50
    )
    php_version = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=50
    )


class UpdateDetailsSerializer(serializers.Serializer):
    version = serializers.CharField()
    download_url = serializers.CharField(allow_null=True)
    changelog = serializers.ListField(child=serializers.CharField())


class UpdateCheckSerializer(serializers.Serializer):
    """Serializer for UpdateCheckDTO."""

    slug = serializers.CharField()
    current_version = serializers.CharField()
    latest_version = serializers.CharField(allow_null=True)
    has_update = serializers.BooleanField()
    license_valid = serializers.BooleanField()
    update_info = UpdateDetailsSerializer(allow_null=True)


class ChangelogEntrySerializer(serializers.Serializer):
    version = serializers.CharField()
    changes = serializers.ListField(child=serializers.CharField())


class PluginInfoSerializer(serializers.Serializer):
    """Serializer for PluginInfoDTO."""

    name = serializers.CharField()
    slug = serializers.CharField()
    version = serializers.CharField()
    last_updated = serializers.DateTimeField()
    sections = serializers.DictField(child=serializers.CharField())
