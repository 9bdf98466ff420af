"""
Integration tests for management commands.
"""

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from activations.infrastructure.models import Activation
from licenses.infrastructure.models import License
from products.infrastructure.models import Product


@pytest.mark.django_db
class TestSeedLicenses:
    """Tests for seed_licenses command."""

    def test_seed(self, engine):
        out = StringIO()
        call_command("seed_licenses", stdout=out)

        assert License.objects.count() == 5
        assert Activation.objects.count() == 3
        assert Product.objects.filter(slug="tutor-lms-tracking").exists()
        assert "Database seeded successfully" in out.getvalue()

    def test_seed_skip_product(self, engine):
        call_command("seed_licenses", "--skip-product", stdout=StringIO())

        assert Product.objects.count() == 0
        assert License.objects.count() == 5


@pytest.mark.django_db
class TestCreateLicense:
    """Tests for create_license command."""

    def test_create(self, engine):
        out = StringIO()
        call_command(
            "create_license",
            "buyer@example.com",
            "--plan",
            "agency",
            "--max-activations",
            "10",
            "--expires",
            "2030-12-31",
            stdout=out,
        )

        license = License.objects.get(email="buyer@example.com")
        assert license.plan == "agency"
        assert license.max_activations == 10
        assert license.expires_at.year == 2030
        assert license.license_key in out.getvalue()

    def test_create_for_product(self, engine, product):
        call_command(
            "create_license", "buyer@example.com", "--product", product.slug, stdout=StringIO()
        )

        assert License.objects.get(email="buyer@example.com").product_id == product.id

    def test_unknown_product(self, engine):
        with pytest.raises(CommandError):
            call_command("create_license", "buyer@example.com", "--product", "missing")

    def test_invalid_expiry(self, engine):
        with pytest.raises(CommandError):
            call_command("create_license", "buyer@example.com", "--expires", "someday")
