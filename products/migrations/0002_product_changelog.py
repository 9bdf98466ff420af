from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="product",
            name="changelog",
            field=models.TextField(
                blank=True, default="", help_text="Release notes, one change per line"
            ),
        ),
    ]
