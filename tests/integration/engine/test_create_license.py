"""
Integration tests for license creation.
"""

import uuid

import pytest

from core.domain.exceptions import ProductNotFoundError, StoreUnavailableError
from core.domain.value_objects import AuditAction
from licenses.domain.license_key import key_pattern
from licenses.infrastructure.models import AuditLog, License


@pytest.mark.django_db
class TestCreateLicense:
    """Tests for LicenseEngine.create_license()."""

    def test_create(self, engine, product):
        result = engine.create_license(
            email="buyer@example.com",
            plan="pro",
            max_activations=3,
            product_id=product.id,
            metadata={"source": "admin", "note": "vip"},
        )

        assert result.success
        assert result.message == "License created successfully"
        license = result.license
        assert key_pattern("TLAT").match(license.license_key)
        assert license.plan == "pro"
        assert license.max_activations == 3
        assert license.product_id == product.id
        assert license.metadata == {"source": "admin", "note": "vip"}
        assert License.objects.filter(license_key=license.license_key).exists()

    def test_create_is_audited(self, engine):
        license = engine.create_license(email="buyer@example.com").license

        entry = AuditLog.objects.get(license_id=license.id)
        assert entry.action == AuditAction.CREATED.value
        assert entry.details["email"] == "buyer@example.com"
        assert entry.details["plan"] == "standard"

    def test_unknown_product(self, engine):
        with pytest.raises(ProductNotFoundError):
            engine.create_license(email="buyer@example.com", product_id=uuid.uuid4())

    def test_invalid_input(self, engine):
        with pytest.raises(ValueError):
            engine.create_license(email="not-an-email")
        with pytest.raises(ValueError):
            engine.create_license(email="buyer@example.com", max_activations=0)
        assert License.objects.count() == 0

    def test_key_conflict_is_regenerated(self, engine, license_factory, monkeypatch):
        """A generated key that already exists is replaced by a fresh one."""
        existing = license_factory()
        keys = iter([existing.license_key, existing.license_key, "TLAT-ABCD-EFGH-JKLM-NPQR"])
        monkeypatch.setattr(
            "licenses.domain.license.generate_license_key", lambda prefix="TLAT": next(keys)
        )

        created = engine.create_license(email="other@example.com").license

        assert created.license_key == "TLAT-ABCD-EFGH-JKLM-NPQR"
        assert License.objects.count() == 2

    def test_key_conflict_exhausted(self, engine, license_factory, monkeypatch):
        """Giving up after the configured attempts reports the store as unavailable."""
        existing = license_factory()
        monkeypatch.setattr(
            "licenses.domain.license.generate_license_key",
            lambda prefix="TLAT": existing.license_key,
        )

        with pytest.raises(StoreUnavailableError):
            engine.create_license(email="other@example.com")
        assert License.objects.count() == 1
