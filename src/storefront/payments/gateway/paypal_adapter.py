"""PayPal gateway adapter over the REST v1 payments API.

Authorization creates a ``sale`` payment and returns its approval link.
Capture executes the payment once the payer has approved it. Transport
errors and non-2xx responses come back as unsuccessful results and are
never retried.
"""

import requests
import structlog

from storefront.payments.gateway.port import (
    AuthorizationResult,
    CaptureResult,
    GatewayLineItem,
    PaymentGateway,
)

logger = structlog.get_logger(__name__)


class PayPalGateway(PaymentGateway):
    def __init__(
        self,
        base_url: str,
        client_id: str,
        client_secret: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self.session = session or requests.Session()

    def _access_token(self) -> str:
        response = self.session.post(
            f"{self.base_url}/v1/oauth2/token",
            auth=(self.client_id, self.client_secret),
            data={"grant_type": "client_credentials"},
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()["access_token"]

    def _post(self, path: str, payload: dict) -> dict:
        token = self._access_token()
        response = self.session.post(
            f"{self.base_url}{path}",
            json=payload,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def authorize(
        self,
        line_items: list[GatewayLineItem],
        total_amount: str,
        currency: str,
        return_url: str,
        cancel_url: str,
    ) -> AuthorizationResult:
        payload = {
            "intent": "sale",
            "payer": {"payment_method": "paypal"},
            "redirect_urls": {"return_url": return_url, "cancel_url": cancel_url},
            "transactions": [
                {
                    "item_list": {
                        "items": [
                            {
                                "name": item.name,
                                "sku": item.sku,
                                "price": item.price,
                                "currency": currency,
                                "quantity": item.quantity,
                            }
                            for item in line_items
                        ]
                    },
                    "amount": {"currency": currency, "total": total_amount},
                    "description": "Storefront order",
                }
            ],
        }

        try:
            payment = self._post("/v1/payments/payment", payload)
        except requests.RequestException as exc:
            logger.warning("PayPal payment creation failed", error=str(exc))
            return AuthorizationResult(success=False, failure_reason=f"PayPal payment creation failed: {exc}")

        approval_url = next(
            (link["href"] for link in payment.get("links", []) if link.get("rel") == "approval_url"),
            None,
        )
        if not approval_url:
            return AuthorizationResult(
                success=False,
                gateway_order_ref=payment.get("id"),
                failure_reason="PayPal response carried no approval_url link",
            )

        return AuthorizationResult(
            success=True,
            approval_url=approval_url,
            gateway_order_ref=payment.get("id"),
        )

    def capture(self, payment_id: str, payer_id: str) -> CaptureResult:
        try:
            payment = self._post(f"/v1/payments/payment/{payment_id}/execute", {"payer_id": payer_id})
        except requests.RequestException as exc:
            logger.warning("PayPal payment execution failed", payment_id=payment_id, error=str(exc))
            return CaptureResult(success=False, failure_reason=f"PayPal payment execution failed: {exc}")

        if payment.get("state") != "approved":
            return CaptureResult(
                success=False,
                raw=payment,
                failure_reason=f"PayPal payment state is {payment.get('state')}",
            )
        return CaptureResult(success=True, raw=payment)
