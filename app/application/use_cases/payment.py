from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from app.application.ports.payment import PaymentPort
from app.application.use_cases.booking_wizard import BookingWizard
from app.domain.entities.booking_draft import BookingStep
from app.domain.entities.coach import CoachCandidate
from app.domain.entities.payment import CardDetails, PaymentConfirmation, PaymentQuote


DEFAULT_SESSION_PRICE = 75.0
SETUP_FEE = 25.0
TAX_RATE = 0.08

_EXPIRY_RE = re.compile(r"^\d{2}/\d{2}$")


@dataclass(frozen=True)
class PaymentOutcome:
    success: bool
    confirmation: PaymentConfirmation | None = None
    errors: dict[str, str] = field(default_factory=dict)


def quote_for(coach: CoachCandidate | None, currency: str = "gbp") -> PaymentQuote:
    session_price = coach.price_per_session if coach and coach.price_per_session else DEFAULT_SESSION_PRICE
    subtotal = session_price + SETUP_FEE
    tax = round(subtotal * TAX_RATE, 2)
    return PaymentQuote(
        session_price=session_price,
        setup_fee=SETUP_FEE,
        tax=tax,
        total=round(subtotal + tax, 2),
        currency=currency,
    )


def detect_card_brand(number: str) -> str:
    digits = "".join(ch for ch in number if ch.isdigit())
    if digits.startswith("4"):
        return "Visa"
    if re.match(r"^5[1-5]", digits):
        return "Mastercard"
    if re.match(r"^3[47]", digits):
        return "American Express"
    if digits.startswith("6"):
        return "Discover"
    return "Card"


def validate_payment_form(card: CardDetails, accepted_terms: bool) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not accepted_terms:
        errors["terms"] = "Please accept the terms and conditions"

    if not card.digits:
        errors["card_number"] = "Card number is required"
    elif len(card.digits) < 16:
        errors["card_number"] = "Please enter a valid card number"

    if not card.cardholder_name.strip():
        errors["cardholder_name"] = "Cardholder name is required"

    if not card.expiry:
        errors["expiry"] = "Expiry date is required"
    elif not _EXPIRY_RE.match(card.expiry):
        errors["expiry"] = "Please enter a valid expiry date (MM/YY)"

    if not card.cvv:
        errors["cvv"] = "CVV is required"
    elif len(card.cvv) < 3:
        errors["cvv"] = "Please enter a valid CVV"

    if not card.billing_postcode.strip():
        errors["billing_postcode"] = "Postcode is required"
    return errors


class PaymentService:
    def __init__(self, gateway: PaymentPort, currency: str = "gbp") -> None:
        self._gateway = gateway
        self._currency = currency
        self._logger = logging.getLogger(__name__)

    def quote(self, wizard: BookingWizard) -> PaymentQuote:
        return quote_for(wizard.draft.coach, self._currency)

    def submit(
        self,
        wizard: BookingWizard,
        card: CardDetails,
        accepted_terms: bool,
        idempotency_key: str | None = None,
    ) -> PaymentOutcome:
        """
        Charge the booking. Only a redacted confirmation reaches the draft;
        failures come back as inline errors and leave the wizard where it is.
        """
        if wizard.current_step != BookingStep.PAYMENT:
            return PaymentOutcome(success=False, errors={"payment": "Complete the earlier steps before paying."})
        if wizard.draft.payment is not None:
            return PaymentOutcome(success=False, errors={"payment": "This booking has already been paid."})

        errors = validate_payment_form(card, accepted_terms)
        if errors:
            return PaymentOutcome(success=False, errors=errors)

        quote = self.quote(wizard)
        coach = wizard.draft.coach
        description = f"Empire Performance Coaching Session - {coach.name if coach else 'Session'}"
        try:
            result = self._gateway.confirm_payment(
                card, quote.amount_minor, quote.currency, description, idempotency_key=idempotency_key
            )
        except Exception as e:
            self._logger.error("Payment gateway error", extra={"error": str(e)})
            return PaymentOutcome(
                success=False,
                errors={"payment": "Payment could not be processed. Please try again."},
            )

        if not result.success or not result.intent_id:
            self._logger.warning("Payment declined", extra={"reason": result.error})
            return PaymentOutcome(
                success=False,
                errors={"payment": result.error or "Payment failed. Please try again."},
            )

        confirmation = PaymentConfirmation(
            token=result.intent_id,
            brand=detect_card_brand(card.number),
            last4=card.digits[-4:],
            amount_minor=quote.amount_minor,
            currency=quote.currency,
        )
        wizard.set_payment(confirmation)
        self._logger.info("Payment confirmed", extra={"reason": confirmation.brand})
        return PaymentOutcome(success=True, confirmation=confirmation)
