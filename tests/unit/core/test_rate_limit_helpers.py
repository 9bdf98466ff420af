"""
Unit tests for rate limiting helpers.
"""

import pytest

from core.middleware.metrics import normalize_endpoint
from core.middleware.rate_limit import normalize_ip


class TestNormalizeIp:
    """Tests for normalize_ip()."""

    @pytest.mark.parametrize(
        "ip,expected",
        [
            ("203.0.113.10", "203.0.113.10"),
            ("::ffff:203.0.113.10", "203.0.113.10"),
            ("2001:db8:85a3:1:8a2e:370:7334:1", "2001:db8:85a3:1"),
            (None, "unknown"),
            ("", "unknown"),
        ],
    )
    def test_normalize(self, ip, expected):
        assert normalize_ip(ip) == expected


class TestNormalizeEndpoint:
    """Tests for metrics endpoint labels."""

    def test_license_keys_and_ids_are_collapsed(self):
        assert (
            normalize_endpoint("/api/v1/admin/licenses/TLAT-AAAA-BBBB-CCCC-DDDD")
            == "/api/v1/admin/licenses/{key}"
        )
        assert (
            normalize_endpoint("/api/v1/admin/products/0b7c2a4e-8f1d-4a53-9b1e-2f6d3c4a5b6c")
            == "/api/v1/admin/products/{id}"
        )
        assert normalize_endpoint("/api/v1/license/activate") == "/api/v1/license/activate"
