"""
Integration tests for heartbeats.
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from activations.domain.activation import SiteInfo
from activations.infrastructure.models import Activation
from core.domain.outcomes import HeartbeatError


@pytest.mark.django_db
class TestRecordHeartbeat:
    """Tests for LicenseEngine.record_heartbeat()."""

    def test_heartbeat(self, engine, license):
        engine.activate_license(
            license.license_key, "example.com", SiteInfo(wp_version="6.3", plugin_version="1.0.0")
        )
        before = Activation.objects.get(domain="example.com").last_heartbeat

        result = engine.record_heartbeat(
            license.license_key, "example.com", SiteInfo(plugin_version="1.1.0")
        )

        assert result.success
        assert result.message == "Heartbeat recorded"
        assert result.valid is True
        assert result.plan == "pro"
        assert result.expires_at is None
        row = Activation.objects.get(domain="example.com")
        assert row.last_heartbeat >= before
        assert row.wp_version == "6.3"
        assert row.plugin_version == "1.1.0"

    def test_heartbeat_reports_expiry(self, engine, license):
        """An expired license still records heartbeats but reports invalid."""
        engine.activate_license(license.license_key, "example.com")
        engine.update_license(
            license.license_key, {"expires_at": timezone.now() - timedelta(minutes=1)}
        )

        result = engine.record_heartbeat(license.license_key, "example.com")

        assert result.success
        assert result.valid is False

    def test_not_activated(self, engine, license):
        result = engine.record_heartbeat(license.license_key, "example.com")

        assert not result.success
        assert result.error == HeartbeatError.NOT_ACTIVATED
        assert result.message == "No active activation for this domain"

    def test_invalid_key(self, engine):
        result = engine.record_heartbeat("TLAT-XXXX-XXXX-XXXX-XXXX", "example.com")

        assert result.error == HeartbeatError.INVALID_KEY

    def test_heartbeat_does_not_change_accounting(self, engine, license):
        engine.activate_license(license.license_key, "example.com")

        engine.record_heartbeat(license.license_key, "example.com")

        result = engine.validate_license(license.license_key, "example.com")
        assert result.license.production_activations == 1
