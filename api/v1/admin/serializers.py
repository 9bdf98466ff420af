"""
Serializers for the admin API.
"""

from rest_framework import serializers

from api.v1.license.serializers import ActivationSummarySerializer


class CreateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for create license request."""

    email = serializers.EmailField(required=True)
    plan = serializers.CharField(required=False, default="standard", max_length=50)
    max_activations = serializers.IntegerField(required=False, default=1, min_value=1)
    expires_at = serializers.DateTimeField(required=False, allow_null=True, default=None)
    product_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    metadata = serializers.DictField(required=False, default=dict)


class UpdateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for update license request; only sent fields change."""

    plan = serializers.CharField(required=False, max_length=50)
    max_activations = serializers.IntegerField(required=False, min_value=1)
    expires_at = serializers.DateTimeField(required=False, allow_null=True)
    email = serializers.EmailField(required=False)


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.UUIDField()
    license_key = serializers.CharField()
    product_id = serializers.UUIDField(allow_null=True)
    email = serializers.EmailField()
    plan = serializers.CharField()
    max_activations = serializers.IntegerField()
    expires_at = serializers.DateTimeField(allow_null=True)
    is_expired = serializers.BooleanField()
    metadata = serializers.DictField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    active_activations = serializers.SerializerMethodField()
    activations = ActivationSummarySerializer(many=True)

    def get_active_activations(self, obj) -> int:
        return sum(1 for activation in obj.activations if activation.is_active)


class RecentActivationSerializer(serializers.Serializer):
    domain = serializers.CharField()
    activated_at = serializers.DateTimeField()
    license_key = serializers.CharField()
    email = serializers.EmailField()


class StatsSerializer(serializers.Serializer):
    """Serializer for LicenseStatsDTO."""

    total_licenses = serializers.IntegerField()
    active_activations = serializers.IntegerField()
    expired_licenses = serializers.IntegerField()
    by_plan = serializers.DictField(child=serializers.IntegerField())
    recent_activations = RecentActivationSerializer(many=True)


class CreateProductRequestSerializer(serializers.Serializer):
    """Serializer for create product request."""

    slug = serializers.SlugField(required=True, max_length=100)
    name = serializers.CharField(required=True, max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    current_version = serializers.CharField(required=False, default="1.0.0", max_length=50)
    download_url = serializers.URLField(
        required=False, allow_null=True, default=None, max_length=500
    )
    changelog = serializers.CharField(required=False, allow_blank=True, default="")


class UpdateProductRequestSerializer(serializers.Serializer):
    """Serializer for update product request; only sent fields change."""

    name = serializers.CharField(required=False, max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    current_version = serializers.CharField(required=False, max_length=50)
    download_url = serializers.URLField(required=False, allow_null=True, max_length=500)
    changelog = serializers.CharField(required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)


class ProductStatsSerializer(serializers.Serializer):
    total_licenses = serializers.IntegerField()
    active_licenses = serializers.IntegerField()
    lifetime_licenses = serializers.IntegerField()


class ProductSerializer(serializers.Serializer):
    """Serializer for ProductDTO."""

    id = serializers.UUIDField()
    slug = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    current_version = serializers.CharField()
    download_url = serializers.CharField(allow_null=True)
    changelog = serializers.CharField(allow_blank=True)
    is_active = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    stats = ProductStatsSerializer(allow_null=True)
