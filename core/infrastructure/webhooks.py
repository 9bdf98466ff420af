"""
Incoming webhook signatures.

Payment providers sign the raw request body; the signature must be
checked against those exact bytes before the JSON is parsed.
"""
import hashlib
import hmac
import logging
from typing import Dict, List

logger = logging.getLogger(__name__)


class WebhookSignatureVerifier:
    """Verifier for Stripe-style ``t=<timestamp>,v1=<hex>`` signature headers."""

    @staticmethod
    def generate_signature(payload: bytes, timestamp: str, secret: str) -> str:
        """
        Generate HMAC signature for webhook payload.

        Args:
            payload: Raw request body
            timestamp: Timestamp from the signature header
            secret: Webhook secret

        Returns:
            HMAC SHA-256 signature (hex) of ``"{timestamp}.{payload}"``
        """
        signed_payload = timestamp.encode() + b"." + payload
        return hmac.new(secret.encode(), signed_payload, hashlib.sha256).hexdigest()

    @staticmethod
    def parse_header(header: str) -> Dict[str, List[str]]:
        """Split ``k=v,k=v`` pairs; a key may repeat."""
        parts: Dict[str, List[str]] = {}
        for element in (header or "").split(","):
            key, sep, value = element.strip().partition("=")
            if sep:
                parts.setdefault(key, []).append(value)
        return parts

    @staticmethod
    def verify_signature(payload: bytes, header: str, secret: str) -> bool:
        """
        Verify webhook signature.

        Args:
            payload: Raw request body
            header: Value of the Stripe-Signature header
            secret: Webhook secret

        Returns:
            True if any v1 signature in the header matches
        """
        parts = WebhookSignatureVerifier.parse_header(header)
        timestamps = parts.get("t")
        signatures = parts.get("v1", [])
        if not timestamps or not signatures:
            logger.warning("Webhook signature header is incomplete")
            return False

        expected = WebhookSignatureVerifier.generate_signature(payload, timestamps[0], secret)
        return any(hmac.compare_digest(expected, signature) for signature in signatures)
