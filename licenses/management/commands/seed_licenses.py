"""
Django management command to seed the database with test licenses.

Creates:
- The default webhook product, if it is missing
- Five licenses covering the standard, pro, agency, lifetime and expired cases
- Activations on test.local for the standard license and on two
  production domains for the pro license
"""

import logging
from datetime import datetime, timezone

from django.conf import settings
from django.core.management.base import BaseCommand

from activations.domain.activation import SiteInfo
from api.dependencies import get_engine
from products.application.commands.product_commands import CreateProductCommand

logger = logging.getLogger(__name__)

SEED_LICENSES = [
    {"email": "test@example.com", "plan": "standard", "max_activations": 1},
    {"email": "pro@example.com", "plan": "pro", "max_activations": 3},
    {"email": "agency@example.com", "plan": "agency", "max_activations": 10},
    {"email": "ltd@example.com", "plan": "lifetime", "max_activations": 5},
    {
        "email": "expired@example.com",
        "plan": "standard",
        "max_activations": 1,
        "expires_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    },
]

SEED_ACTIVATIONS = {
    "test@example.com": [
        (
            "test.local",
            SiteInfo(site_url="https://test.local", wp_version="6.4", plugin_version="1.0.0"),
        ),
    ],
    "pro@example.com": [
        ("site1.example.com", SiteInfo(wp_version="6.4")),
        ("site2.example.com", SiteInfo(wp_version="6.3")),
    ],
}


class Command(BaseCommand):
    """Command to seed test licenses."""

    help = "Seed the database with test licenses and activations"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--skip-product",
            action="store_true",
            help="Do not create the default webhook product",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        engine = get_engine()
        self.stdout.write("Seeding database with test data...\n")

        product_id = None
        if not options["skip_product"]:
            product_id = self.ensure_product(engine)

        for data in SEED_LICENSES:
            result = engine.create_license(product_id=product_id, metadata={"source": "seed"}, **data)
            license_key = result.license.license_key
            self.stdout.write(f"Created: {license_key} ({data['plan']}) - {data['email']}")

            activations = SEED_ACTIVATIONS.get(data["email"], [])
            for domain, site_info in activations:
                engine.activate_license(license_key, domain, site_info)
            if activations:
                domains = ", ".join(domain for domain, _ in activations)
                self.stdout.write(f"  -> Activated on {domains}")

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS("\nDatabase seeded successfully"))

    def ensure_product(self, engine):
        """Create the default webhook product unless it already exists."""
        slug = settings.DEFAULT_WEBHOOK_PRODUCT_SLUG
        product = engine.find_product_by_slug(slug)
        if product:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING(f"Product '{slug}' already exists"))
            return product.id

        product = engine.create_product(
            CreateProductCommand(slug=slug, name=slug.replace("-", " ").title())
        )
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Created product: {product.name} (slug: {slug})"))
        return product.id
