import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "slug",
                    models.SlugField(
                        help_text="Identifier used by client plugins", max_length=100, unique=True
                    ),
                ),
                ("name", models.CharField(help_text="Product display name", max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("current_version", models.CharField(default="1.0.0", max_length=50)),
                ("download_url", models.URLField(blank=True, max_length=500, null=True)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "products",
                "ordering": ["name"],
                "indexes": [models.Index(fields=["slug"], name="idx_products_slug")],
            },
        ),
    ]
