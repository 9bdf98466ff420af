"""
Unit tests for observability helpers.
"""

from core.middleware.observability import mask_license_key


class TestMaskLicenseKey:
    """Tests for mask_license_key."""

    def test_masks_after_first_segment(self):
        assert mask_license_key("TLAT-AB12-CD34-EF56-GH78") == "TLAT-AB12-****"

    def test_missing_key(self):
        assert mask_license_key(None) is None
        assert mask_license_key("") is None
