"""
Unit tests for license key generation.
"""

from licenses.domain.license_key import KEY_ALPHABET, generate_license_key, key_pattern


class TestGenerateLicenseKey:
    """Tests for generate_license_key()."""

    def test_format(self):
        """Keys look like TLAT-XXXX-XXXX-XXXX-XXXX."""
        key = generate_license_key()

        assert key_pattern("TLAT").match(key)
        prefix, *groups = key.split("-")
        assert prefix == "TLAT"
        assert len(groups) == 4
        assert all(len(group) == 4 for group in groups)

    def test_alphabet_excludes_look_alikes(self):
        """0/O and 1/I are never used."""
        for _ in range(50):
            body = generate_license_key().split("-", 1)[1].replace("-", "")
            assert set(body) <= set(KEY_ALPHABET)
        assert not set("01IO") & set(KEY_ALPHABET)

    def test_custom_prefix(self):
        key = generate_license_key("ACME")

        assert key.startswith("ACME-")
        assert key_pattern("ACME").match(key)
        assert not key_pattern("TLAT").match(key)

    def test_keys_are_random(self):
        keys = {generate_license_key() for _ in range(200)}

        assert len(keys) == 200
