"""
Webhook views.

Receives purchase events from the payment provider.
"""
import json
import logging

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.dependencies import get_engine
from api.exceptions import error_body
from core.infrastructure.webhooks import WebhookSignatureVerifier
from licenses.application.services.checkout_service import CheckoutService
from licenses.tasks import send_license_email

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


class StripeWebhookView(APIView):
    """View for Stripe webhook events."""

    @extend_schema(
        operation_id="stripe_webhook",
        summary="Stripe Webhook",
        description=(
            "Creates a license when a checkout session completes and emails the key "
            "to the customer. Other event types are acknowledged and ignored."
        ),
        tags=["Webhooks"],
        request=None,
        responses={
            200: {"description": "Event received"},
            400: {"description": "Invalid signature or payload"},
        },
    )
    def post(self, request: Request) -> Response:
        # The signature covers the raw bytes, so read them before request.data
        payload = request.body
        secret = settings.STRIPE_WEBHOOK_SECRET
        if secret and not WebhookSignatureVerifier.verify_signature(
            payload, request.headers.get("Stripe-Signature", ""), secret
        ):
            logger.warning("Invalid Stripe webhook signature")
            return Response(
                error_body("invalid_signature", "Webhook signature verification failed"),
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            event = json.loads(payload or b"{}")
        except ValueError:
            return Response(
                error_body("invalid_payload", "Webhook body is not valid JSON"),
                status=status.HTTP_400_BAD_REQUEST,
            )

        event_type = event.get("type")
        logger.info("Stripe webhook received", extra={"event_type": event_type})

        if event_type == CHECKOUT_COMPLETED:
            service = CheckoutService(
                engine=get_engine(),
                default_product_slug=settings.DEFAULT_WEBHOOK_PRODUCT_SLUG,
                send_email=send_license_email,
            )
            service.handle_checkout_completed((event.get("data") or {}).get("object") or {})
        else:
            logger.debug("Unhandled webhook event type", extra={"event_type": event_type})

        return Response({"received": True})
