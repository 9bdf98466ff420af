"""
Integration tests for license activation.
"""

import pytest

from activations.application.handlers.activate_license_handler import (
    ACTIVATED_DEV_MESSAGE,
    ACTIVATED_MESSAGE,
    ALREADY_ACTIVATED_MESSAGE,
)
from activations.domain.activation import SiteInfo
from activations.infrastructure.models import Activation
from core.domain.outcomes import ActivationError
from core.domain.value_objects import AuditAction
from licenses.infrastructure.models import AuditLog


def _active_domains(license):
    return set(
        Activation.objects.filter(license_id=license.id, is_active=True).values_list(
            "domain", flat=True
        )
    )


@pytest.mark.django_db
class TestActivateLicense:
    """Tests for LicenseEngine.activate_license()."""

    def test_activate_production_domain(self, engine, license, site_info):
        result = engine.activate_license(license.license_key, "example.com", site_info)

        assert result.success
        assert result.error is None
        assert result.message == ACTIVATED_MESSAGE
        assert result.token
        assert result.already_activated is False
        assert result.is_dev_environment is False
        assert result.remaining == 1
        assert result.production_activations == 1
        assert result.dev_activations == 0
        assert result.activation.domain == "example.com"
        assert result.activation.wp_version == "6.4"

        claims = engine.token_issuer.verify(result.token)
        assert claims.matches(license.license_key, "example.com")

    def test_domain_is_normalised(self, engine, license):
        first = engine.activate_license(license.license_key, "  Example.COM ")
        second = engine.activate_license(license.license_key, "example.com")

        assert first.activation.domain == "example.com"
        assert second.already_activated is True
        assert _active_domains(license) == {"example.com"}

    def test_activation_is_idempotent(self, engine, license):
        """Re-activating an active domain refreshes it without taking a slot."""
        first = engine.activate_license(license.license_key, "example.com")
        second = engine.activate_license(
            license.license_key, "example.com", SiteInfo(plugin_version="2.0.0")
        )

        assert second.success
        assert second.already_activated is True
        assert second.message == ALREADY_ACTIVATED_MESSAGE
        assert second.remaining == first.remaining == 1
        assert second.activation.id == first.activation.id
        assert second.activation.plugin_version == "2.0.0"
        assert second.activation.last_heartbeat >= first.activation.last_heartbeat
        assert Activation.objects.filter(license_id=license.id).count() == 1

    def test_limit_reached(self, engine, license):
        engine.activate_license(license.license_key, "a.com")
        engine.activate_license(license.license_key, "b.com")

        result = engine.activate_license(license.license_key, "c.com")

        assert not result.success
        assert result.error == ActivationError.LIMIT_REACHED
        assert "Maximum production activations (2) reached" in result.message
        assert {activation.domain for activation in result.activations} == {"a.com", "b.com"}
        assert result.token is None
        assert _active_domains(license) == {"a.com", "b.com"}

    def test_development_domains_are_unlimited(self, engine, license_factory):
        license = license_factory(max_activations=1)
        engine.activate_license(license.license_key, "example.com")

        for domain in ("localhost", "staging.example.com", "mysite.local", "shop.ddev.site"):
            result = engine.activate_license(license.license_key, domain)
            assert result.success, domain
            assert result.is_dev_environment is True
            assert result.message == ACTIVATED_DEV_MESSAGE
            assert result.remaining == 0

        assert result.production_activations == 1
        assert result.dev_activations == 4

    def test_expired_license(self, engine, expired_license):
        result = engine.activate_license(expired_license.license_key, "example.com")

        assert not result.success
        assert result.error == ActivationError.EXPIRED
        assert result.message == "License has expired"
        assert Activation.objects.count() == 0

    def test_expired_license_cannot_activate_development(self, engine, expired_license):
        result = engine.activate_license(expired_license.license_key, "localhost")

        assert result.error == ActivationError.EXPIRED

    def test_invalid_key(self, engine):
        result = engine.activate_license("TLAT-XXXX-XXXX-XXXX-XXXX", "example.com")

        assert not result.success
        assert result.error == ActivationError.INVALID_KEY
        assert result.message == "License key not found"

    def test_reactivation_reuses_row(self, engine, license):
        """A deactivated domain comes back on its original row."""
        first = engine.activate_license(license.license_key, "example.com")
        engine.deactivate_license(license.license_key, "example.com")

        result = engine.activate_license(license.license_key, "example.com")

        assert result.success
        assert result.already_activated is False
        assert result.activation.id == first.activation.id
        assert result.activation.is_active is True
        assert result.activation.deactivated_at is None
        assert result.remaining == 1
        assert Activation.objects.filter(license_id=license.id).count() == 1
        actions = list(
            AuditLog.objects.filter(license_id=license.id).values_list("action", flat=True)
        )
        assert actions == [
            AuditAction.CREATED.value,
            AuditAction.ACTIVATED.value,
            AuditAction.DEACTIVATED.value,
            AuditAction.REACTIVATED.value,
        ]

    def test_reactivation_needs_a_free_slot(self, engine, license_factory):
        license = license_factory(max_activations=1)
        engine.activate_license(license.license_key, "a.com")
        engine.deactivate_license(license.license_key, "a.com")
        engine.activate_license(license.license_key, "b.com")

        result = engine.activate_license(license.license_key, "a.com")

        assert result.error == ActivationError.LIMIT_REACHED
        assert _active_domains(license) == {"b.com"}

    def test_activation_is_audited(self, engine, license, site_info):
        engine.activate_license(license.license_key, "example.com", site_info)

        entry = AuditLog.objects.get(license_id=license.id, action=AuditAction.ACTIVATED.value)
        assert entry.domain == "example.com"
        assert entry.ip_address == "203.0.113.10"
        assert entry.details["wp_version"] == "6.4"

    def test_failed_audit_does_not_fail_activation(self, engine, license, monkeypatch):
        from django.db import DatabaseError

        def broken_append(entry):
            raise DatabaseError("audit table is gone")

        monkeypatch.setattr(engine.store.audit, "append", broken_append)

        result = engine.activate_license(license.license_key, "example.com")

        assert result.success
        assert _active_domains(license) == {"example.com"}
