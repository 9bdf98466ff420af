"""
Integration tests for the Stripe webhook endpoint.
"""

import json
import time

import pytest
from django.core import mail
from django.urls import reverse
from kombu.exceptions import OperationalError

from core.infrastructure.webhooks import WebhookSignatureVerifier
from licenses.infrastructure.models import License
from licenses.tasks import send_license_email

SECRET = "whsec_test"


def signed_post(client, event, secret=SECRET):
    """POST an event with a valid Stripe-Signature header."""
    payload = json.dumps(event).encode()
    timestamp = str(int(time.time()))
    signature = WebhookSignatureVerifier.generate_signature(payload, timestamp, secret)
    return client.post(
        reverse("webhook-stripe"),
        data=payload,
        content_type="application/json",
        HTTP_STRIPE_SIGNATURE=f"t={timestamp},v1={signature}",
    )


def checkout_event(**metadata):
    return {
        "id": "evt_1",
        "type": "checkout.session.completed",
        "data": {
            "object": {
                "id": "cs_test_1",
                "customer": "cus_1",
                "customer_details": {"email": "buyer@example.com"},
                "metadata": metadata,
            }
        },
    }


@pytest.fixture
def webhook_secret(settings):
    settings.STRIPE_WEBHOOK_SECRET = SECRET
    return SECRET


@pytest.mark.django_db
@pytest.mark.integration
class TestStripeWebhook:
    """Integration tests for /api/v1/webhooks/stripe."""

    def test_invalid_signature(self, api_client, webhook_secret):
        response = signed_post(api_client, checkout_event(), secret="whsec_other")

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_signature"
        assert License.objects.count() == 0

    def test_missing_signature(self, api_client, webhook_secret):
        response = api_client.post(
            reverse("webhook-stripe"), data=b"{}", content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_signature"

    def test_invalid_json(self, api_client):
        response = api_client.post(
            reverse("webhook-stripe"), data=b"not json", content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_payload"

    def test_checkout_creates_license_and_sends_email(
        self, api_client, webhook_secret, product, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            response = signed_post(api_client, checkout_event())

        assert response.status_code == 200
        assert response.json() == {"received": True}

        license = License.objects.get(email="buyer@example.com")
        assert license.max_activations == 1
        assert license.expires_at is None
        assert license.product_id == product.id
        assert license.metadata["source"] == "stripe"
        assert license.metadata["stripe_session_id"] == "cs_test_1"

        assert len(mail.outbox) == 1
        assert mail.outbox[0].subject == "Your Tutor LMS Tracking License Key"
        assert mail.outbox[0].to == ["buyer@example.com"]
        assert license.license_key in mail.outbox[0].body

    def test_annual_checkout_expires(
        self, api_client, webhook_secret, product, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            response = signed_post(api_client, checkout_event(license_type="annual"))

        assert response.status_code == 200
        license = License.objects.get(email="buyer@example.com")
        assert license.expires_at is not None
        assert "Annual License" in mail.outbox[0].body

    def test_redelivered_event_creates_one_license(
        self, api_client, webhook_secret, product, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            first = signed_post(api_client, checkout_event())
        with django_capture_on_commit_callbacks(execute=True):
            second = signed_post(api_client, checkout_event())

        assert first.status_code == 200
        assert second.status_code == 200
        assert License.objects.count() == 1
        assert len(mail.outbox) == 1

    def test_broker_outage_still_acknowledges(
        self, api_client, webhook_secret, product, monkeypatch, django_capture_on_commit_callbacks
    ):
        def broker_down(**kwargs):
            raise OperationalError("broker down")

        monkeypatch.setattr(send_license_email, "delay", broker_down)

        with django_capture_on_commit_callbacks(execute=True):
            first = signed_post(api_client, checkout_event())
        with django_capture_on_commit_callbacks(execute=True):
            second = signed_post(api_client, checkout_event())

        assert first.status_code == 200
        assert second.status_code == 200
        assert License.objects.count() == 1
        assert mail.outbox == []

    def test_unknown_product_is_acknowledged(self, api_client, webhook_secret):
        response = signed_post(api_client, checkout_event(product_slug="missing"))

        assert response.status_code == 200
        assert License.objects.count() == 0
        assert mail.outbox == []

    def test_other_events_are_ignored(self, api_client, webhook_secret, product):
        response = signed_post(api_client, {"id": "evt_2", "type": "invoice.paid"})

        assert response.status_code == 200
        assert response.json() == {"received": True}
        assert License.objects.count() == 0

    def test_unsigned_when_secret_not_configured(self, api_client, product):
        response = api_client.post(
            reverse("webhook-stripe"),
            data=json.dumps(checkout_event()),
            content_type="application/json",
        )

        assert response.status_code == 200
        assert License.objects.count() == 1
