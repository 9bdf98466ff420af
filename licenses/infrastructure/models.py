"""
License and AuditLog models.
"""
import uuid

from django.db import models
from django.utils import timezone


class License(models.Model):
    """
    A license grants use of a product on a limited number of production domains.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license_key = models.CharField(max_length=100, unique=True)
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="licenses",
    )
    email = models.EmailField()
    plan = models.CharField(max_length=50, default="standard")
    max_activations = models.PositiveIntegerField(
        default=1, help_text="Maximum number of production activations"
    )
    expires_at = models.DateTimeField(null=True, blank=True, help_text="Empty means perpetual")
    metadata = models.JSONField(default=dict, blank=True, help_text="Provenance of the license")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["license_key"], name="idx_licenses_key"),
            models.Index(fields=["email"], name="idx_licenses_email"),
            models.Index(fields=["product"], name="idx_licenses_product"),
        ]

    def __str__(self):
        return self.license_key

    @property
    def is_expired(self) -> bool:
        """
        Check if license is past its expiry.

        Returns:
            True if the license has an expiry in the past
        """
        return bool(self.expires_at and self.expires_at < timezone.now())


class AuditLog(models.Model):
    """
    Immutable audit trail of license operations.
    """

    ACTION_CHOICES = [
        ("created", "Created"),
        ("activated", "Activated"),
        ("reactivated", "Reactivated"),
        ("deactivated", "Deactivated"),
        ("updated", "Updated"),
        ("deleted", "Deleted"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license_id = models.UUIDField(null=True, blank=True)
    action = models.CharField(max_length=50, choices=ACTION_CHOICES)
    domain = models.CharField(max_length=255, null=True, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    details = models.JSONField(default=dict, blank=True, help_text="Details of the change")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "audit_log"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["license_id"], name="idx_audit_license"),
            models.Index(fields=["created_at"], name="idx_audit_created"),
        ]

    def __str__(self):
        return f"{self.action} - {self.license_id}"
