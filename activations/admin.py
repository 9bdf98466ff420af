"""
Django admin configuration for activations app.
"""

from django.contrib import admin
from django.utils.html import format_html

from activations.domain.classifier import is_development
from activations.infrastructure.models import Activation


@admin.register(Activation)
class ActivationAdmin(admin.ModelAdmin):
    """Admin interface for Activation model."""

    list_display = [
        "domain_display",
        "license",
        "environment",
        "is_active_display",
        "wp_version",
        "plugin_version",
        "activated_at",
        "last_heartbeat",
    ]
    list_filter = ["is_active", "activated_at", "last_heartbeat"]
    search_fields = ["domain", "site_url", "license__license_key", "license__email"]
    readonly_fields = ["id", "activated_at", "last_heartbeat", "deactivated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "license", "domain", "is_active"),
            },
        ),
        (
            "Site Information",
            {
                "fields": ("site_url", "wp_version", "plugin_version"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("activated_at", "last_heartbeat", "deactivated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def domain_display(self, obj):
        """Display domain with truncation."""
        if len(obj.domain) > 50:
            return format_html('<span title="{}">{}</span>', obj.domain, obj.domain[:47] + "...")
        return obj.domain

    domain_display.short_description = "Domain"

    def environment(self, obj):
        return "development" if is_development(obj.domain) else "production"

    def is_active_display(self, obj):
        """Display active status with color."""
        if obj.is_active:
            return format_html('<span style="color: green; font-weight: bold;">✓ Active</span>')
        return format_html('<span style="color: red; font-weight: bold;">✗ Inactive</span>')

    is_active_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("license")
