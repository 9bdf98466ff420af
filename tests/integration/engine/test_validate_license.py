"""
Integration tests for license validation.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from django.conf import settings

from core.domain.outcomes import ValidationError


def _token(license_key, domain, expires_in):
    payload = {
        "licenseKey": license_key,
        "domain": domain,
        "plan": "pro",
        "exp": int((datetime.now(timezone.utc) + expires_in).timestamp()),
    }
    return jwt.encode(payload, settings.LICENSE_JWT_SECRET, algorithm="HS256")


@pytest.mark.django_db
class TestValidateLicense:
    """Tests for LicenseEngine.validate_license()."""

    def test_valid(self, engine, license_factory, product):
        license = license_factory(plan="pro", max_activations=3, product_id=product.id)
        engine.activate_license(license.license_key, "example.com")
        engine.activate_license(license.license_key, "localhost")

        result = engine.validate_license(license.license_key, "example.com")

        assert result.valid
        assert result.error is None
        assert result.message == "License is valid"
        assert result.license.plan == "pro"
        assert result.license.max_activations == 3
        assert result.license.current_activations == 2
        assert result.license.production_activations == 1
        assert result.license.dev_activations == 1
        assert result.product.slug == "tutor-lms-tracking"
        assert result.product.latest_version == "1.2.0"
        assert result.activation.domain == "example.com"

    def test_valid_without_product(self, engine, license):
        engine.activate_license(license.license_key, "example.com")

        result = engine.validate_license(license.license_key, "example.com")

        assert result.valid
        assert result.product is None

    def test_invalid_key(self, engine):
        result = engine.validate_license("TLAT-XXXX-XXXX-XXXX-XXXX", "example.com")

        assert not result.valid
        assert result.error == ValidationError.INVALID_KEY

    def test_product_mismatch(self, engine, license_factory, product):
        license = license_factory(product_id=product.id)
        engine.activate_license(license.license_key, "example.com")

        result = engine.validate_license(
            license.license_key, "example.com", product_slug="other-plugin"
        )

        assert result.error == ValidationError.PRODUCT_MISMATCH
        assert result.message == "License is for Tutor LMS Tracking, not other-plugin"

    def test_matching_product_slug(self, engine, license_factory, product):
        license = license_factory(product_id=product.id)
        engine.activate_license(license.license_key, "example.com")

        result = engine.validate_license(
            license.license_key, "example.com", product_slug="tutor-lms-tracking"
        )

        assert result.valid

    def test_expired_is_checked_before_activation(self, engine, expired_license):
        result = engine.validate_license(expired_license.license_key, "example.com")

        assert result.error == ValidationError.EXPIRED
        assert result.expired_at == expired_license.expires_at

    def test_not_activated(self, engine, license):
        result = engine.validate_license(license.license_key, "example.com")

        assert result.error == ValidationError.NOT_ACTIVATED

    def test_deactivated_domain_is_not_activated(self, engine, license):
        engine.activate_license(license.license_key, "example.com")
        engine.deactivate_license(license.license_key, "example.com")

        result = engine.validate_license(license.license_key, "example.com")

        assert result.error == ValidationError.NOT_ACTIVATED

    def test_token_bound_to_domain(self, engine, license):
        token = engine.activate_license(license.license_key, "example.com").token

        assert engine.validate_license(license.license_key, "example.com", token=token).valid

    def test_token_for_other_domain(self, engine, license):
        engine.activate_license(license.license_key, "example.com")
        other_token = engine.activate_license(license.license_key, "other.com").token

        result = engine.validate_license(license.license_key, "example.com", token=other_token)

        assert result.error == ValidationError.TOKEN_MISMATCH

    def test_token_for_other_license(self, engine, license, license_factory):
        other = license_factory()
        engine.activate_license(license.license_key, "example.com")
        other_token = engine.activate_license(other.license_key, "example.com").token

        result = engine.validate_license(license.license_key, "example.com", token=other_token)

        assert result.error == ValidationError.TOKEN_MISMATCH

    def test_malformed_token(self, engine, license):
        engine.activate_license(license.license_key, "example.com")

        result = engine.validate_license(license.license_key, "example.com", token="garbage")

        assert result.error == ValidationError.INVALID_TOKEN

    def test_expired_token(self, engine, license):
        engine.activate_license(license.license_key, "example.com")
        token = _token(license.license_key, "example.com", timedelta(days=-1))

        result = engine.validate_license(license.license_key, "example.com", token=token)

        assert result.error == ValidationError.TOKEN_EXPIRED

    def test_token_never_overrides_stored_state(self, engine, license):
        """A well-formed token for a domain that is not activated is not enough."""
        token = _token(license.license_key, "example.com", timedelta(days=30))

        result = engine.validate_license(license.license_key, "example.com", token=token)

        assert result.error == ValidationError.NOT_ACTIVATED
