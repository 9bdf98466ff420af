"""
Integration tests for database failures.
"""

import pytest
from django.db import OperationalError

from core.domain.exceptions import StoreUnavailableError


def _unavailable(*args, **kwargs):
    raise OperationalError("could not connect to server")


@pytest.mark.django_db
class TestStoreUnavailable:
    """Database errors surface as StoreUnavailableError, never as a result."""

    @pytest.mark.parametrize(
        "operation",
        ["activate_license", "deactivate_license", "validate_license", "record_heartbeat"],
    )
    def test_license_operations(self, engine, license, monkeypatch, operation):
        monkeypatch.setattr(engine.store.licenses, "find_by_key", _unavailable)

        with pytest.raises(StoreUnavailableError) as exc_info:
            getattr(engine, operation)(license.license_key, "example.com")

        assert exc_info.value.code == "store_unavailable"

    def test_create_license(self, engine, monkeypatch):
        monkeypatch.setattr(engine.store.licenses, "add", _unavailable)

        with pytest.raises(StoreUnavailableError):
            engine.create_license(email="buyer@example.com")

    def test_insert_failure_during_activation(self, engine, license, monkeypatch):
        monkeypatch.setattr(engine.store.activations, "add", _unavailable)

        with pytest.raises(StoreUnavailableError):
            engine.activate_license(license.license_key, "example.com")

        assert engine.validate_license(license.license_key, "example.com").error == "not_activated"
