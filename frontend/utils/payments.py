"""PayPal Orders v2 integration used by the booking wizard."""

import logging
import time
from typing import Any, Dict, Optional

import requests

from config import (
    API_TIMEOUT,
    PAYPAL_API_BASE,
    PAYPAL_CLIENT_ID,
    PAYPAL_CLIENT_SECRET,
    PAYPAL_CURRENCY,
    PAYPAL_RETURN_URL,
)
from utils.booking_wizard import PaymentError, PaymentOrder

logger = logging.getLogger(__name__)

TOKEN_REFRESH_MARGIN = 60  # seconds


class PayPalProvider:
    """Creates and captures EUR orders with client-credentials OAuth."""

    def __init__(
        self,
        client_id: str = PAYPAL_CLIENT_ID,
        client_secret: str = PAYPAL_CLIENT_SECRET,
        api_base: str = PAYPAL_API_BASE,
        currency: str = PAYPAL_CURRENCY,
        return_url: str = PAYPAL_RETURN_URL,
        timeout: float = API_TIMEOUT,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.api_base = api_base.rstrip("/")
        self.currency = currency
        self.return_url = return_url
        self.timeout = timeout
        self.session = requests.Session()
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def _access_token(self) -> str:
        if self._token and time.time() < self._token_expires_at - TOKEN_REFRESH_MARGIN:
            return self._token

        if not self.configured:
            raise PaymentError("PayPal credentials are not configured")

        try:
            response = self.session.post(
                f"{self.api_base}/v1/oauth2/token",
                data={"grant_type": "client_credentials"},
                auth=(self.client_id, self.client_secret),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise PaymentError(f"PayPal unreachable: {e}") from e

        if response.status_code >= 400:
            raise PaymentError(f"PayPal authentication failed: HTTP {response.status_code}")

        data = response.json()
        self._token = data["access_token"]
        self._token_expires_at = time.time() + int(data.get("expires_in", 0))
        return self._token

    def _post(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self._access_token()}",
            "Content-Type": "application/json",
        }
        try:
            response = self.session.post(
                f"{self.api_base}{path}",
                json=payload or {},
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise PaymentError(f"PayPal unreachable: {e}") from e

        if response.status_code >= 400:
            logger.error(
                "PayPal request failed",
                extra={"path": path, "status_code": response.status_code, "body": response.text[:500]},
            )
            raise PaymentError(f"PayPal request failed: HTTP {response.status_code}")

        return response.json()

    def create_order(self, amount: str, description: str) -> PaymentOrder:
        order = self._post(
            "/v2/checkout/orders",
            {
                "intent": "CAPTURE",
                "purchase_units": [
                    {
                        "description": description[:127],
                        "amount": {"currency_code": self.currency, "value": amount},
                    }
                ],
                "application_context": {
                    "user_action": "PAY_NOW",
                    "shipping_preference": "NO_SHIPPING",
                    "return_url": self.return_url,
                    "cancel_url": self.return_url,
                },
            },
        )

        approval_url = next(
            (link["href"] for link in order.get("links", []) if link.get("rel") in ("approve", "payer-action")),
            None,
        )
        logger.info(f"PayPal order created: {order['id']}", extra={"amount": amount})
        return PaymentOrder(order_id=order["id"], approval_url=approval_url)

    def capture_order(self, order_id: str) -> str:
        """Capture an approved order; the order id is the booking's transaction id."""
        order = self._post(f"/v2/checkout/orders/{order_id}/capture")

        if order.get("status") != "COMPLETED":
            raise PaymentError(f"PayPal order {order_id} not completed: {order.get('status')}")

        logger.info(f"PayPal order captured: {order_id}")
        return order.get("id", order_id)
