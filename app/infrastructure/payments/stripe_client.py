from __future__ import annotations

import logging

import stripe

from app.application.ports.payment import PaymentPort, PaymentResult
from app.core.config import settings
from app.domain.entities.payment import CardDetails


class StripePaymentGateway(PaymentPort):
    def __init__(self, secret_key: str | None = None) -> None:
        self._secret_key = secret_key or settings.STRIPE_SECRET_KEY
        self._logger = logging.getLogger(__name__)

        if not self._secret_key:
            raise ValueError("STRIPE_SECRET_KEY is required for Stripe payments")

    def confirm_payment(
        self,
        card: CardDetails,
        amount_minor: int,
        currency: str,
        description: str,
        idempotency_key: str | None = None,
    ) -> PaymentResult:
        exp_month, _, exp_year = card.expiry.partition("/")
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount_minor,
                currency=currency,
                description=description,
                confirm=True,
                payment_method_data={
                    "type": "card",
                    "card": {
                        "number": card.digits,
                        "exp_month": int(exp_month),
                        "exp_year": int(exp_year),
                        "cvc": card.cvv,
                    },
                    "billing_details": {
                        "name": card.cardholder_name,
                        "address": {"postal_code": card.billing_postcode},
                    },
                },
                api_key=self._secret_key,
                idempotency_key=idempotency_key,
            )
        except stripe.CardError as e:
            message = e.user_message or str(e)
            self._logger.warning("Stripe declined payment", extra={"reason": message})
            return PaymentResult(success=False, error=message)
        except stripe.StripeError as e:
            self._logger.error("Stripe request failed", extra={"error": str(e)})
            return PaymentResult(success=False, error="Payment service unavailable")

        if intent.status != "succeeded":
            return PaymentResult(success=False, intent_id=intent.id, error="Payment requires further action")

        self._logger.info("Stripe payment succeeded")
        return PaymentResult(success=True, intent_id=intent.id)
