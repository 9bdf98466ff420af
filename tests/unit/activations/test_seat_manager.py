"""
Unit tests for SeatManager domain service.
"""

import pytest

from activations.domain.activation import Activation
from activations.domain.services import SeatManager
from core.domain.exceptions import ActivationLimitReachedError
from licenses.domain.license import License


def _license(max_activations=2):
    return License.create(email="test@example.com", max_activations=max_activations)


def _activations(license, *domains):
    return [Activation.create(license_id=license.id, domain=domain) for domain in domains]


class TestSeatManager:
    """Tests for SeatManager service."""

    def test_usage_splits_by_environment(self):
        """Development activations are counted separately."""
        license = _license()
        activations = _activations(license, "a.com", "b.com", "localhost", "staging.a.com")

        usage = SeatManager.usage(activations)

        assert usage.production == 2
        assert usage.development == 2
        assert usage.total == 4

    def test_usage_ignores_inactive(self):
        """Deactivated rows free their slot."""
        license = _license()
        first, second = _activations(license, "a.com", "b.com")

        usage = SeatManager.usage([first, second.deactivate()])

        assert usage.production == 1

    def test_ensure_capacity_allows_below_cap(self):
        license = _license(max_activations=2)
        SeatManager.ensure_capacity(license, _activations(license, "a.com"), "b.com")

    def test_ensure_capacity_rejects_at_cap(self):
        """A production domain cannot take a slot when all are used."""
        license = _license(max_activations=2)
        activations = _activations(license, "a.com", "b.com")

        with pytest.raises(ActivationLimitReachedError) as exc_info:
            SeatManager.ensure_capacity(license, activations, "c.com")

        assert exc_info.value.code == "limit_reached"
        assert exc_info.value.max_activations == 2

    def test_ensure_capacity_always_admits_development(self):
        """Dev/staging domains are unlimited."""
        license = _license(max_activations=1)
        activations = _activations(license, "a.com")

        SeatManager.ensure_capacity(license, activations, "localhost")
        SeatManager.ensure_capacity(license, activations, "staging.a.com")

    def test_ensure_within_cap(self):
        """The recount after a write rejects only an exceeded cap."""
        license = _license(max_activations=1)

        SeatManager.ensure_within_cap(license, _activations(license, "a.com", "localhost"))
        with pytest.raises(ActivationLimitReachedError):
            SeatManager.ensure_within_cap(license, _activations(license, "a.com", "b.com"))

    def test_remaining_counts_production_only(self):
        license = _license(max_activations=3)
        activations = _activations(license, "a.com", "localhost", "mysite.local")

        assert SeatManager.remaining(license, activations) == 2

    def test_find_active(self):
        license = _license()
        first, second = _activations(license, "a.com", "b.com")

        assert SeatManager.find_active([first, second], "b.com") == second
        assert SeatManager.find_active([first.deactivate()], "a.com") is None
        assert SeatManager.find_active([first], "c.com") is None
