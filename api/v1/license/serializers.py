"""
Serializers for the public license API.

Field names are snake_case on the wire, matching the WordPress client.
"""

from rest_framework import serializers


class LicenseRequestSerializer(serializers.Serializer):
    """
    Body shared by activate, deactivate, validate and heartbeat.

    license_key and domain are checked by the views so that a missing
    value is reported as ``missing_params``.
    """

    license_key = serializers.CharField(required=False, allow_blank=True, max_length=100)
    domain = serializers.CharField(required=False, allow_blank=True, max_length=255)
    site_url = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=500
    )
    wp_version = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=50
    )
    plugin_version = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=50
    )
    token = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    product_slug = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=100
    )


class ActivationSummarySerializer(serializers.Serializer):
    """Serializer for ActivationSummaryDTO."""

    id = serializers.UUIDField()
    domain = serializers.CharField()
    site_url = serializers.CharField(allow_null=True)
    wp_version = serializers.CharField(allow_null=True)
    plugin_version = serializers.CharField(allow_null=True)
    activated_at = serializers.DateTimeField()
    last_heartbeat = serializers.DateTimeField(allow_null=True)
    is_active = serializers.BooleanField()
    deactivated_at = serializers.DateTimeField(allow_null=True)
    is_dev_environment = serializers.BooleanField()


class ActivationResultSerializer(serializers.Serializer):
    """Serializer for ActivationResult."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    error = serializers.CharField(allow_null=True)
    activation = ActivationSummarySerializer(allow_null=True)
    token = serializers.CharField(allow_null=True)
    already_activated = serializers.BooleanField()
    is_dev_environment = serializers.BooleanField()
    remaining = serializers.IntegerField(allow_null=True)
    production_activations = serializers.IntegerField(allow_null=True)
    dev_activations = serializers.IntegerField(allow_null=True)
    activations = ActivationSummarySerializer(many=True)


class DeactivationResultSerializer(serializers.Serializer):
    """Serializer for DeactivationResult."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    error = serializers.CharField(allow_null=True)
    remaining = serializers.IntegerField(allow_null=True)


class LicenseSummarySerializer(serializers.Serializer):
    plan = serializers.CharField()
    email = serializers.EmailField()
    expires_at = serializers.DateTimeField(allow_null=True)
    max_activations = serializers.IntegerField()
    current_activations = serializers.IntegerField()
    production_activations = serializers.IntegerField()
    dev_activations = serializers.IntegerField()


class ProductSummarySerializer(serializers.Serializer):
    slug = serializers.CharField()
    name = serializers.CharField()
    latest_version = serializers.CharField()


class ValidatedActivationSerializer(serializers.Serializer):
    domain = serializers.CharField()
    activated_at = serializers.DateTimeField()


class ValidationResultSerializer(serializers.Serializer):
    """Serializer for ValidationResult."""

    valid = serializers.BooleanField()
    message = serializers.CharField()
    error = serializers.CharField(allow_null=True)
    expired_at = serializers.DateTimeField(allow_null=True)
    license = LicenseSummarySerializer(allow_null=True)
    product = ProductSummarySerializer(allow_null=True)
    activation = ValidatedActivationSerializer(allow_null=True)


class HeartbeatResultSerializer(serializers.Serializer):
    """Serializer for HeartbeatResult."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    error = serializers.CharField(allow_null=True)
    valid = serializers.BooleanField()
    expires_at = serializers.DateTimeField(allow_null=True)
    plan = serializers.CharField(allow_null=True)
