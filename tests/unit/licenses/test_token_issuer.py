"""
Unit tests for JWT activation tokens.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from core.domain.exceptions import InvalidTokenError, TokenExpiredError
from licenses.domain.license import License
from licenses.infrastructure.tokens import ALGORITHM, JWTTokenIssuer

SECRET = "unit-test-secret-0123456789abcdef0123456789"


@pytest.fixture
def issuer():
    return JWTTokenIssuer(secret=SECRET, default_ttl_days=365)


class TestJWTTokenIssuer:
    """Tests for JWTTokenIssuer."""

    def test_issue_and_verify(self, issuer):
        license = License.create(email="test@example.com", plan="pro")

        claims = issuer.verify(issuer.issue(license, "example.com"))

        assert claims.license_key == license.license_key
        assert claims.domain == "example.com"
        assert claims.plan == "pro"
        assert claims.matches(license.license_key, "example.com")
        assert not claims.matches(license.license_key, "other.com")

    def test_claims_use_wire_names(self, issuer):
        license = License.create(email="test@example.com")

        payload = jwt.decode(issuer.issue(license, "example.com"), SECRET, algorithms=[ALGORITHM])

        assert payload["licenseKey"] == license.license_key
        assert payload["domain"] == "example.com"
        assert {"exp", "iat", "plan"} <= set(payload)

    def test_perpetual_license_gets_default_lifetime(self, issuer):
        license = License.create(email="test@example.com")

        claims = issuer.verify(issuer.issue(license, "example.com"))

        expected = datetime.now(timezone.utc) + timedelta(days=365)
        assert abs((claims.expires_at - expected).total_seconds()) < 60

    def test_token_expires_with_license(self, issuer):
        expires_at = datetime.now(timezone.utc).replace(microsecond=0) + timedelta(days=30)
        license = License.create(email="test@example.com", expires_at=expires_at)

        claims = issuer.verify(issuer.issue(license, "example.com"))

        assert claims.expires_at == expires_at

    def test_expired_token(self, issuer):
        license = License.create(
            email="test@example.com",
            expires_at=datetime.now(timezone.utc) - timedelta(days=1),
        )

        with pytest.raises(TokenExpiredError):
            issuer.verify(issuer.issue(license, "example.com"))

    def test_wrong_secret(self, issuer):
        license = License.create(email="test@example.com")
        other = JWTTokenIssuer(secret="another-secret-0123456789abcdef0123456789")

        with pytest.raises(InvalidTokenError):
            other.verify(issuer.issue(license, "example.com"))

    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
    def test_malformed_token(self, issuer, token):
        with pytest.raises(InvalidTokenError):
            issuer.verify(token)

    def test_missing_claims(self, issuer):
        token = jwt.encode(
            {"exp": int((datetime.now(timezone.utc) + timedelta(days=1)).timestamp())},
            SECRET,
            algorithm=ALGORITHM,
        )

        with pytest.raises(InvalidTokenError):
            issuer.verify(token)

    def test_secret_required(self):
        with pytest.raises(ValueError):
            JWTTokenIssuer(secret="")
