from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.domain.entities.payment import CardDetails


@dataclass(frozen=True)
class PaymentResult:
    success: bool
    intent_id: str | None = None
    error: str | None = None


class PaymentPort(ABC):
    @abstractmethod
    def confirm_payment(
        self,
        card: CardDetails,
        amount_minor: int,
        currency: str,
        description: str,
        idempotency_key: str | None = None,
    ) -> PaymentResult:
        """
        Charge the card. Declines and gateway errors return success=False.
        Repeating a call with the same idempotency key must not charge twice.
        """
        raise NotImplementedError
