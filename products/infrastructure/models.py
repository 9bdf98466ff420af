"""
Product model.
"""
import uuid

from django.db import models


class Product(models.Model):
    """
    Represents a plugin that can be licensed (e.g., Tutor LMS Advanced Tracking).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slug = models.SlugField(max_length=100, unique=True, help_text="Identifier used by client plugins")
    name = models.CharField(max_length=255, help_text="Product display name")
    description = models.TextField(blank=True, default="")
    current_version = models.CharField(max_length=50, default="1.0.0")
    download_url = models.URLField(max_length=500, null=True, blank=True)
    changelog = models.TextField(
        blank=True, default="", help_text="Release notes, one change per line"
    )
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["slug"], name="idx_products_slug"),
        ]

    def clean(self):
        """Validate product fields."""
        from django.core.exceptions import ValidationError

        if not self.slug:
            raise ValidationError("Slug is required")
        if not self.name:
            raise ValidationError("Name is required")

    def save(self, *args, **kwargs):
        """Save product with validation."""
        self.full_clean(validate_unique=False)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name
