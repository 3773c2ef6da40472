from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CardDetails:
    number: str
    expiry: str  # MM/YY
    cvv: str
    cardholder_name: str
    billing_postcode: str

    @property
    def digits(self) -> str:
        return "".join(ch for ch in self.number if ch.isdigit())


@dataclass(frozen=True)
class PaymentQuote:
    session_price: float
    setup_fee: float
    tax: float
    total: float
    currency: str = "gbp"

    @property
    def amount_minor(self) -> int:
        return int(round(self.total * 100))


@dataclass(frozen=True)
class PaymentConfirmation:
    """Redacted record of a successful charge. Never carries card data."""

    token: str
    brand: str
    last4: str
    amount_minor: int
    currency: str = "gbp"
