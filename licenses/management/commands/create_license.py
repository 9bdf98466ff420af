"""
Django management command to issue a license from the command line.
"""

import logging
from datetime import datetime, time, timezone

from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_date, parse_datetime

from api.dependencies import get_engine
from core.domain.exceptions import DomainException

logger = logging.getLogger(__name__)


def parse_expiry(value: str) -> datetime:
    """
    Parse an ISO date or datetime; naive values are taken as UTC.

    Raises:
        CommandError: If the value is not a date
    """
    parsed = parse_datetime(value)
    if parsed is None:
        day = parse_date(value)
        if day is None:
            raise CommandError(f"Invalid expiry date: {value}")
        parsed = datetime.combine(day, time.min)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class Command(BaseCommand):
    """Command to create a license."""

    help = "Create a license and print its key"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("email", type=str, help="License owner email")
        parser.add_argument("--plan", type=str, default="standard", help="Plan (default: standard)")
        parser.add_argument(
            "--max-activations",
            type=int,
            default=1,
            help="Production activation cap (default: 1)",
        )
        parser.add_argument(
            "--expires",
            type=str,
            default=None,
            help="Expiry date, e.g. 2026-12-31 (default: never)",
        )
        parser.add_argument(
            "--product",
            type=str,
            default=None,
            help="Product slug to bind the license to",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        engine = get_engine()
        expires_at = parse_expiry(options["expires"]) if options["expires"] else None

        product_id = None
        if options["product"]:
            product = engine.find_product_by_slug(options["product"])
            if not product:
                raise CommandError(f"Product not found: {options['product']}")
            product_id = product.id

        try:
            result = engine.create_license(
                email=options["email"],
                plan=options["plan"],
                max_activations=options["max_activations"],
                expires_at=expires_at,
                product_id=product_id,
                metadata={"source": "cli"},
            )
        except (DomainException, ValueError) as e:
            raise CommandError(str(e)) from e

        license = result.license
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"License created: {license.license_key}"))
        self.stdout.write(f"  Email: {license.email}")
        self.stdout.write(f"  Plan: {license.plan}")
        self.stdout.write(f"  Max activations: {license.max_activations}")
        self.stdout.write(f"  Expires: {license.expires_at or 'never'}")
