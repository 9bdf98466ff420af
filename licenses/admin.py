"""
Django admin configuration for licenses app.
"""
import json

from django.contrib import admin
from django.utils.html import format_html

from activations.domain.classifier import is_development
from activations.infrastructure.models import Activation
from licenses.infrastructure.models import AuditLog, License


class ActivationInline(admin.TabularInline):
    """Activations shown on the license page."""

    model = Activation
    extra = 0
    fields = ["domain", "is_active", "wp_version", "plugin_version", "activated_at", "last_heartbeat"]
    readonly_fields = ["activated_at", "last_heartbeat"]
    ordering = ["-activated_at"]


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "license_key",
        "email",
        "plan",
        "product",
        "status_display",
        "max_activations",
        "seats_used",
        "expires_at",
        "created_at",
    ]
    list_filter = ["plan", "expires_at", "created_at", "product"]
    search_fields = ["license_key", "email", "product__name"]
    readonly_fields = ["id", "license_key", "created_at", "updated_at", "seats_used"]
    inlines = [ActivationInline]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "license_key", "email", "plan", "product"),
            },
        ),
        (
            "Activations",
            {
                "fields": ("max_activations", "seats_used"),
            },
        ),
        (
            "Expiration",
            {
                "fields": ("expires_at",),
            },
        ),
        (
            "Provenance",
            {
                "fields": ("metadata",),
                "classes": ("collapse",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display expiry status with color coding."""
        if obj.is_expired:
            return format_html('<span style="color: gray; font-weight: bold;">EXPIRED</span>')
        return format_html('<span style="color: green; font-weight: bold;">VALID</span>')

    status_display.short_description = "Status"

    def seats_used(self, obj):
        """Active production activations; dev domains are free."""
        return sum(
            1
            for activation in obj.activations.all()
            if activation.is_active and not is_development(activation.domain)
        )

    seats_used.short_description = "Seats Used"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("product").prefetch_related("activations")


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Admin interface for AuditLog model."""

    list_display = ["action", "license_id", "domain", "ip_address", "created_at"]
    list_filter = ["action", "created_at"]
    search_fields = ["license_id", "domain", "ip_address"]
    readonly_fields = ["id", "created_at", "details_display"]
    fields = ["id", "license_id", "action", "domain", "ip_address", "details_display", "created_at"]

    def details_display(self, obj):
        """Display details in a formatted way."""
        if obj.details:
            return format_html(
                '<pre style="background: #f5f5f5; padding: 10px; '
                'border-radius: 4px; overflow-x: auto;">{}</pre>',
                json.dumps(obj.details, indent=2),
            )
        return "-"

    details_display.short_description = "Details"

    def has_add_permission(self, request):
        """Audit logs are read-only."""
        return False

    def has_change_permission(self, request, obj=None):
        """Audit logs are read-only."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Audit entries are never deleted."""
        return False
