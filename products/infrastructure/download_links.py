"""
Signed download links.

A link is the product's download URL with a short-lived HS256 JWT in the
``token`` query parameter. The file host checks the token with the same
secret before serving the archive.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import jwt

from core.domain.exceptions import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class DownloadLinkSigner:
    """PyJWT signer for plugin download links."""

    def __init__(self, secret: str, ttl_seconds: int = 3600):
        """
        Initialize signer.

        Args:
            secret: HMAC signing secret
            ttl_seconds: Link lifetime
        """
        if not secret:
            raise ValueError("Download link secret is required")
        self.secret = secret
        self.ttl = timedelta(seconds=ttl_seconds)

    def sign(
        self, download_url: str, slug: str, version: str, domain: str, license_key: str
    ) -> str:
        """
        Append a download token to a URL.

        Only the first key segment goes into the token; it is there for
        the file host's logs, not for authorization.

        Returns:
            The URL with a ``token`` query parameter
        """
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "slug": slug,
                "version": version,
                "domain": domain,
                "licenseKey": license_key[:9],
                "iat": int(now.timestamp()),
                "exp": int((now + self.ttl).timestamp()),
            },
            self.secret,
            algorithm=ALGORITHM,
        )
        parts = urlsplit(download_url)
        query = parse_qsl(parts.query) + [("token", token)]
        return urlunsplit(parts._replace(query=urlencode(query)))

    def verify(self, token: str, slug: str, version: str) -> Dict[str, Any]:
        """
        Check a download token against the requested archive.

        Returns:
            The decoded claims

        Raises:
            TokenExpiredError: If the link has expired
            InvalidTokenError: If the token is bad or names another archive
        """
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "slug", "version"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("Download link has expired. Request a new one.") from exc
        except jwt.InvalidTokenError as exc:
            logger.debug("Download token rejected: %s", exc)
            raise InvalidTokenError("Invalid download token") from exc

        if claims["slug"] != slug:
            raise InvalidTokenError("Token not valid for this plugin")
        if claims["version"] != version:
            raise InvalidTokenError("Token not valid for this version")
        return claims
