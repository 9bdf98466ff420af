"""
Unit tests for Activation domain entity.
"""

import uuid

import pytest

from activations.domain.activation import Activation, SiteInfo


class TestActivationEntity:
    """Tests for Activation entity."""

    def test_create_normalises_domain(self):
        activation = Activation.create(license_id=uuid.uuid4(), domain="  Example.COM ")

        assert activation.domain == "example.com"
        assert activation.is_active is True
        assert activation.last_heartbeat == activation.activated_at
        assert activation.deactivated_at is None

    def test_create_requires_domain(self):
        with pytest.raises(ValueError, match="Domain cannot be empty"):
            Activation.create(license_id=uuid.uuid4(), domain="   ")

    def test_heartbeat_keeps_versions_not_reported(self):
        """Only reported versions overwrite the stored ones."""
        activation = Activation.create(
            license_id=uuid.uuid4(),
            domain="example.com",
            site_info=SiteInfo(wp_version="6.3", plugin_version="1.0.0"),
        )

        updated = activation.record_heartbeat(SiteInfo(plugin_version="1.1.0"))

        assert updated.wp_version == "6.3"
        assert updated.plugin_version == "1.1.0"
        assert updated.last_heartbeat >= activation.last_heartbeat

    def test_deactivate_and_reactivate(self):
        activation = Activation.create(license_id=uuid.uuid4(), domain="example.com")

        deactivated = activation.deactivate()
        assert deactivated.is_active is False
        assert deactivated.deactivated_at is not None
        assert deactivated.deactivate() is deactivated

        reactivated = deactivated.reactivate(SiteInfo(site_url="https://example.com"))
        assert reactivated.is_active is True
        assert reactivated.deactivated_at is None
        assert reactivated.site_url == "https://example.com"
        assert reactivated.activated_at >= activation.activated_at

    def test_classification(self):
        assert Activation.create(license_id=uuid.uuid4(), domain="localhost").is_development
        assert not Activation.create(license_id=uuid.uuid4(), domain="example.com").is_development

    def test_site_info_details_drop_empty_fields(self):
        info = SiteInfo(site_url="https://example.com", wp_version=None)

        assert info.as_details() == {"site_url": "https://example.com"}
