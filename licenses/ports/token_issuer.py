"""
Token issuer port (interface).
"""
from abc import ABC, abstractmethod

from licenses.domain.license import License
from licenses.domain.token import TokenClaims


class TokenIssuer(ABC):
    """Issues and verifies signed tokens binding a license key to a domain."""

    @abstractmethod
    def issue(self, license: License, domain: str) -> str:
        """
        Issue a token for a license on a domain.

        The token expires with the license, or after the default
        lifetime when the license is perpetual.

        Args:
            license: License entity
            domain: Activated domain

        Returns:
            Encoded token
        """
        pass

    @abstractmethod
    def verify(self, token: str) -> TokenClaims:
        """
        Verify a token and return its claims.

        Args:
            token: Encoded token

        Returns:
            Decoded TokenClaims

        Raises:
            TokenExpiredError: If the token is past its expiry
            InvalidTokenError: If the token is malformed or badly signed
        """
        pass
