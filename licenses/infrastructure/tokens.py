"""
JWT activation tokens.

Tokens are HS256-signed JWTs carrying ``licenseKey``, ``domain``, ``plan``
and ``exp``. Clients store them and present them on validation as proof
that a domain was activated for a key.
"""
import logging
from datetime import datetime, timedelta, timezone

import jwt

from core.domain.exceptions import InvalidTokenError, TokenExpiredError
from licenses.domain.license import License
from licenses.domain.token import TokenClaims
from licenses.ports.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class JWTTokenIssuer(TokenIssuer):
    """PyJWT implementation of TokenIssuer."""

    def __init__(self, secret: str, default_ttl_days: int = 365):
        """
        Initialize issuer.

        Args:
            secret: HMAC signing secret
            default_ttl_days: Token lifetime for perpetual licenses
        """
        if not secret:
            raise ValueError("Token secret is required")
        self.secret = secret
        self.default_ttl = timedelta(days=default_ttl_days)

    def _expiry_for(self, license: License) -> datetime:
        if license.expires_at is not None:
            return license.expires_at
        return datetime.now(timezone.utc) + self.default_ttl

    def issue(self, license: License, domain: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "licenseKey": license.license_key,
            "domain": domain,
            "plan": license.plan,
            "iat": int(now.timestamp()),
            "exp": int(self._expiry_for(license).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "licenseKey", "domain"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.InvalidTokenError as exc:
            logger.debug("Token rejected: %s", exc)
            raise InvalidTokenError() from exc

        return TokenClaims(
            license_key=payload["licenseKey"],
            domain=payload["domain"],
            plan=payload.get("plan", ""),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
