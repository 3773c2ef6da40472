from __future__ import annotations

import logging
import uuid

from app.application.ports.payment import PaymentPort, PaymentResult
from app.domain.entities.payment import CardDetails


DECLINED_TEST_CARD = "4000000000000002"


class MockPaymentGateway(PaymentPort):
    def __init__(self) -> None:
        self.charges: list[tuple[str, int, str]] = []
        self._by_key: dict[str, PaymentResult] = {}
        self._logger = logging.getLogger(__name__)

    def confirm_payment(
        self,
        card: CardDetails,
        amount_minor: int,
        currency: str,
        description: str,
        idempotency_key: str | None = None,
    ) -> PaymentResult:
        if idempotency_key and idempotency_key in self._by_key:
            return self._by_key[idempotency_key]

        if card.digits == DECLINED_TEST_CARD:
            result = PaymentResult(success=False, error="Your card was declined.")
        else:
            intent_id = f"pi_mock_{uuid.uuid4().hex[:20]}"
            self.charges.append((intent_id, amount_minor, currency))
            self._logger.info("Mock payment confirmed", extra={"reason": description})
            result = PaymentResult(success=True, intent_id=intent_id)

        if idempotency_key:
            self._by_key[idempotency_key] = result
        return result
