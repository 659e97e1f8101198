"""Configurable fake payment gateway for development and testing.

Simulates the authorize/approve/capture round trip without any external
calls. It can be configured at runtime to succeed or fail, which makes it
useful for:
- Manual API testing via /payments/gateway/configure
- Automated tests with predictable outcomes
- Development without PayPal credentials
"""

from uuid import uuid4

from storefront.payments.gateway.port import (
    AuthorizationResult,
    CaptureResult,
    GatewayLineItem,
    PaymentGateway,
)


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    approval_base_url = "https://fake-gateway.local/approve"

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Payment declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def calls_to(self, method: str) -> list[dict]:
        return [c for c in self.calls if c["method"] == method]

    def authorize(
        self,
        line_items: list[GatewayLineItem],
        total_amount: str,
        currency: str,
        return_url: str,
        cancel_url: str,
    ) -> AuthorizationResult:
        call = {
            "method": "authorize",
            "line_items": list(line_items),
            "total_amount": total_amount,
            "currency": currency,
            "return_url": return_url,
            "cancel_url": cancel_url,
        }
        self.calls.append(call)

        if self.should_succeed:
            ref = f"PAYID-FAKE-{uuid4().hex[:12].upper()}"
            return AuthorizationResult(
                success=True,
                approval_url=f"{self.approval_base_url}?token={ref}",
                gateway_order_ref=ref,
            )
        return AuthorizationResult(success=False, failure_reason=self.failure_reason)

    def capture(self, payment_id: str, payer_id: str) -> CaptureResult:
        call = {
            "method": "capture",
            "payment_id": payment_id,
            "payer_id": payer_id,
        }
        self.calls.append(call)

        if self.should_succeed:
            return CaptureResult(
                success=True,
                raw={"id": payment_id, "state": "approved", "payer_id": payer_id},
            )
        return CaptureResult(success=False, failure_reason=self.failure_reason)
