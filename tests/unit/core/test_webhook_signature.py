"""
Unit tests for webhook signature verification.
"""

from core.infrastructure.webhooks import WebhookSignatureVerifier

SECRET = "whsec_test_secret"
PAYLOAD = b'{"type": "checkout.session.completed"}'


def _header(timestamp="1700000000", secret=SECRET, payload=PAYLOAD):
    signature = WebhookSignatureVerifier.generate_signature(payload, timestamp, secret)
    return f"t={timestamp},v1={signature}"


class TestWebhookSignatureVerifier:
    """Tests for WebhookSignatureVerifier."""

    def test_valid_signature(self):
        assert WebhookSignatureVerifier.verify_signature(PAYLOAD, _header(), SECRET)

    def test_any_v1_signature_may_match(self):
        """Providers send several v1 entries while rolling secrets."""
        valid = _header().split(",")[1]
        header = f"t=1700000000,v1=deadbeef,{valid}"

        assert WebhookSignatureVerifier.verify_signature(PAYLOAD, header, SECRET)

    def test_tampered_payload(self):
        assert not WebhookSignatureVerifier.verify_signature(b"{}", _header(), SECRET)

    def test_wrong_secret(self):
        assert not WebhookSignatureVerifier.verify_signature(
            PAYLOAD, _header(secret="other"), SECRET
        )

    def test_incomplete_header(self):
        assert not WebhookSignatureVerifier.verify_signature(PAYLOAD, "", SECRET)
        assert not WebhookSignatureVerifier.verify_signature(PAYLOAD, "t=1700000000", SECRET)
        assert not WebhookSignatureVerifier.verify_signature(PAYLOAD, "v1=abc", SECRET)

    def test_parse_header(self):
        parts = WebhookSignatureVerifier.parse_header("t=1, v1=a, v1=b, v0=c, junk")

        assert parts == {"t": ["1"], "v1": ["a", "b"], "v0": ["c"]}
