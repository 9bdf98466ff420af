"""
Unit tests for signed download links.
"""

from urllib.parse import parse_qs, urlsplit

import jwt
import pytest

from core.domain.exceptions import InvalidTokenError, TokenExpiredError
from products.infrastructure.download_links import ALGORITHM, DownloadLinkSigner

SECRET = "unit-test-secret-0123456789abcdef0123456789"
KEY = "TLAT-AB12-CD34-EF56-GH78"


@pytest.fixture
def signer():
    return DownloadLinkSigner(SECRET, ttl_seconds=3600)


def _token(url):
    return parse_qs(urlsplit(url).query)["token"][0]


class TestDownloadLinkSigner:
    """Tests for DownloadLinkSigner."""

    def test_sign_and_verify(self, signer):
        url = signer.sign(
            "https://files.example.com/tlat.zip", "tlat", "1.2.0", "example.com", KEY
        )

        assert url.startswith("https://files.example.com/tlat.zip?token=")
        claims = signer.verify(_token(url), "tlat", "1.2.0")
        assert claims["domain"] == "example.com"

    def test_keeps_existing_query(self, signer):
        url = signer.sign(
            "https://files.example.com/get?file=tlat.zip", "tlat", "1.2.0", "example.com", KEY
        )

        query = parse_qs(urlsplit(url).query)
        assert query["file"] == ["tlat.zip"]
        assert "token" in query

    def test_license_key_is_truncated(self, signer):
        url = signer.sign("https://files.example.com/tlat.zip", "tlat", "1.2.0", "a.com", KEY)

        payload = jwt.decode(_token(url), SECRET, algorithms=[ALGORITHM])
        assert payload["licenseKey"] == "TLAT-AB12"

    def test_wrong_slug(self, signer):
        url = signer.sign("https://files.example.com/tlat.zip", "tlat", "1.2.0", "a.com", KEY)

        with pytest.raises(InvalidTokenError, match="plugin"):
            signer.verify(_token(url), "other-plugin", "1.2.0")

    def test_wrong_version(self, signer):
        url = signer.sign("https://files.example.com/tlat.zip", "tlat", "1.2.0", "a.com", KEY)

        with pytest.raises(InvalidTokenError, match="version"):
            signer.verify(_token(url), "tlat", "1.1.0")

    def test_expired(self):
        signer = DownloadLinkSigner(SECRET, ttl_seconds=-10)
        url = signer.sign("https://files.example.com/tlat.zip", "tlat", "1.2.0", "a.com", KEY)

        with pytest.raises(TokenExpiredError):
            signer.verify(_token(url), "tlat", "1.2.0")

    def test_other_secret(self, signer):
        other = DownloadLinkSigner("another-secret-0123456789abcdef0123456789")
        url = other.sign("https://files.example.com/tlat.zip", "tlat", "1.2.0", "a.com", KEY)

        with pytest.raises(InvalidTokenError):
            signer.verify(_token(url), "tlat", "1.2.0")

    def test_secret_required(self):
        with pytest.raises(ValueError):
            DownloadLinkSigner("")
