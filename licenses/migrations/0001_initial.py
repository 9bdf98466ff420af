import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("license_key", models.CharField(max_length=100, unique=True)),
                ("email", models.EmailField(max_length=254)),
                ("plan", models.CharField(default="standard", max_length=50)),
                (
                    "max_activations",
                    models.PositiveIntegerField(
                        default=1, help_text="Maximum number of production activations"
                    ),
                ),
                (
                    "expires_at",
                    models.DateTimeField(blank=True, help_text="Empty means perpetual", null=True),
                ),
                (
                    "metadata",
                    models.JSONField(
                        blank=True, default=dict, help_text="Provenance of the license"
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="licenses",
                        to="products.product",
                    ),
                ),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["license_key"], name="idx_licenses_key"),
                    models.Index(fields=["email"], name="idx_licenses_email"),
                    models.Index(fields=["product"], name="idx_licenses_product"),
                ],
            },
        ),
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("license_id", models.UUIDField(blank=True, null=True)),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("created", "Created"),
                            ("activated", "Activated"),
                            ("reactivated", "Reactivated"),
                            ("deactivated", "Deactivated"),
                            ("updated", "Updated"),
                            ("deleted", "Deleted"),
                        ],
                        max_length=50,
                    ),
                ),
                ("domain", models.CharField(blank=True, max_length=255, null=True)),
                ("ip_address", models.GenericIPAddressField(blank=True, null=True)),
                (
                    "details",
                    models.JSONField(blank=True, default=dict, help_text="Details of the change"),
                ),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "audit_log",
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["license_id"], name="idx_audit_license"),
                    models.Index(fields=["created_at"], name="idx_audit_created"),
                ],
            },
        ),
    ]
