import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("licenses", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Activation",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("domain", models.CharField(max_length=255)),
                ("site_url", models.CharField(blank=True, max_length=500, null=True)),
                ("wp_version", models.CharField(blank=True, max_length=50, null=True)),
                ("plugin_version", models.CharField(blank=True, max_length=50, null=True)),
                ("activated_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("last_heartbeat", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("deactivated_at", models.DateTimeField(blank=True, null=True)),
                (
                    "license",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activations",
                        to="licenses.license",
                    ),
                ),
            ],
            options={
                "db_table": "activations",
                "ordering": ["-activated_at"],
                "indexes": [
                    models.Index(fields=["license"], name="idx_activations_license"),
                    models.Index(fields=["domain"], name="idx_activations_domain"),
                    models.Index(
                        fields=["license", "is_active"], name="idx_activations_lic_active"
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("license", "domain"), name="uniq_activation_license_domain"
                    )
                ],
            },
        ),
    ]
