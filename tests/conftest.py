"""
Pytest configuration and shared fixtures.
"""

from datetime import timedelta

import pytest
from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

from activations.domain.activation import SiteInfo
from api.dependencies import get_engine
from products.application.commands.product_commands import CreateProductCommand


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_client():
    """Fixture for DRF API client carrying the admin key."""
    from rest_framework.test import APIClient

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {settings.ADMIN_API_KEY}")
    return client


@pytest.fixture
def engine(db):
    """Fixture for the license engine built at startup."""
    return get_engine()


@pytest.fixture(autouse=True)
def clear_cache():
    """Rate limit counters live in the cache; start every test empty."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def product(engine):
    """Fixture for a Product saved in database."""
    return engine.create_product(
        CreateProductCommand(
            slug="tutor-lms-tracking",
            name="Tutor LMS Tracking",
            current_version="1.2.0",
        )
    )


@pytest.fixture
def license_factory(engine):
    """
    Fixture for creating licenses through the engine.

    Returns:
        Callable taking create_license keyword arguments and returning LicenseDTO
    """

    def create(**kwargs):
        kwargs.setdefault("email", "test@example.com")
        return engine.create_license(**kwargs).license

    return create


@pytest.fixture
def license(license_factory):
    """Fixture for a standard license with two production activations."""
    return license_factory(plan="pro", max_activations=2)


@pytest.fixture
def expired_license(license_factory):
    """Fixture for a license that expired yesterday."""
    return license_factory(expires_at=timezone.now() - timedelta(days=1))


@pytest.fixture
def site_info():
    """Fixture for the details a WordPress site reports."""
    return SiteInfo(
        site_url="https://example.com",
        wp_version="6.4",
        plugin_version="1.0.0",
        ip_address="203.0.113.10",
    )
