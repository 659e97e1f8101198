"""Payment gateway port (abstract interface).

Checkout asks the gateway to authorize a payment and hands the shopper the
approval URL it returns. Once the shopper has approved, capture finalizes
the payment. FakeGateway and PayPalGateway implement this contract.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class GatewayLineItem:
    """One line of the item list sent with an authorization, in the settlement currency."""

    name: str
    sku: str
    price: str  # Decimal string, two places
    quantity: int


@dataclass(frozen=True)
class AuthorizationResult:
    """Result of asking the gateway to authorize a payment."""

    success: bool
    approval_url: str | None = None
    gateway_order_ref: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class CaptureResult:
    """Result of capturing an approved payment."""

    success: bool
    raw: dict = field(default_factory=dict)
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def authorize(
        self,
        line_items: list[GatewayLineItem],
        total_amount: str,
        currency: str,
        return_url: str,
        cancel_url: str,
    ) -> AuthorizationResult:
        """Request authorization for a payment of ``total_amount`` in ``currency``."""
        ...

    @abstractmethod
    def capture(self, payment_id: str, payer_id: str) -> CaptureResult:
        """Finalize a payment the payer has approved."""
        ...
