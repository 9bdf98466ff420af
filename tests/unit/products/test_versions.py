"""
Unit tests for plugin version comparison.
"""

import pytest

from products.domain.versions import compare_versions, is_newer


class TestCompareVersions:
    """Tests for compare_versions()."""

    @pytest.mark.parametrize(
        "left,right,expected",
        [
            ("1.0.1", "1.0.0", 1),
            ("1.0.0", "1.0.1", -1),
            ("1.2", "1.2.0", 0),
            ("1.10.0", "1.9.9", 1),
            ("2", "1.99.99", 1),
            ("v1.2.0", "1.2.0", 0),
        ],
    )
    def test_ordering(self, left, right, expected):
        assert compare_versions(left, right) == expected

    def test_suffix_is_ignored(self):
        assert compare_versions("1.2.0-beta", "1.2.0") == 0

    def test_non_numeric_part_counts_as_zero(self):
        assert compare_versions("1.x", "1.0") == 0


class TestIsNewer:
    """Tests for is_newer()."""

    def test_newer(self):
        assert is_newer("1.2.0", "1.1.9")

    def test_same_version(self):
        assert not is_newer("1.2.0", "1.2.0")

    def test_unknown_current_version(self):
        assert not is_newer("1.2.0", None)
        assert not is_newer("1.2.0", "")
