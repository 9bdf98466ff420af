"""
Activation Django ORM model.

This is the infrastructure layer model for activations.
Domain entities are in activations.domain.activation.
"""
import uuid

from django.db import models
from django.utils import timezone


class Activation(models.Model):
    """
    Represents one domain's claim on a license.
    Production domains consume a slot from the license's activation cap.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        "licenses.License",
        on_delete=models.CASCADE,
        related_name="activations",
    )
    domain = models.CharField(max_length=255)
    site_url = models.CharField(max_length=500, null=True, blank=True)
    wp_version = models.CharField(max_length=50, null=True, blank=True)
    plugin_version = models.CharField(max_length=50, null=True, blank=True)
    activated_at = models.DateTimeField(default=timezone.now)
    last_heartbeat = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    deactivated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "activations"
        ordering = ["-activated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["license", "domain"], name="uniq_activation_license_domain"
            ),
        ]
        indexes = [
            models.Index(fields=["license"], name="idx_activations_license"),
            models.Index(fields=["domain"], name="idx_activations_domain"),
            models.Index(fields=["license", "is_active"], name="idx_activations_lic_active"),
        ]

    def clean(self):
        """Validate activation fields."""
        from django.core.exceptions import ValidationError

        if not self.domain or len(self.domain.strip()) == 0:
            raise ValidationError("Domain cannot be empty")

    def save(self, *args, **kwargs):
        """Save activation with validation."""
        self.full_clean(validate_unique=False, validate_constraints=False)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.license_id} @ {self.domain}"
