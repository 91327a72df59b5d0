"""Razorpay gateway adapter: order creation and callback signature checks.

One ``RazorpayGateway`` is built at startup (see ``main.lifespan``) and handed
to route handlers through ``get_payment_gateway``. Missing credentials yield
``None`` rather than an exception so the API still boots.
"""

import hashlib
import hmac
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import razorpay
from razorpay.errors import BadRequestError, GatewayError, ServerError
from starlette.concurrency import run_in_threadpool

from charity_api.core.config import Settings, settings
from charity_api.core.exceptions import GatewayOrderError

logger = logging.getLogger(__name__)

PAYMENT_METHOD = "razorpay"
CURRENCY = "INR"

_GATEWAY_ERRORS = (BadRequestError, GatewayError, ServerError)


def to_minor_units(amount: Decimal) -> int:
    """Rupees -> paise."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_signature(secret: str, order_id: str, payment_id: str) -> str:
    """Hex HMAC-SHA256 of ``"{order_id}|{payment_id}"`` keyed by the key secret."""
    message = f"{order_id}|{payment_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


class RazorpayGateway:
    def __init__(self, key_id: str, key_secret: str, client: Any = None):
        self.key_id = key_id
        self._key_secret = key_secret
        self._client = client or razorpay.Client(auth=(key_id, key_secret))

    async def create_order(
        self,
        amount: Decimal,
        receipt: str,
        notes: dict[str, str],
    ) -> dict[str, Any]:
        """Create a gateway order. Raises GatewayOrderError on any failure."""
        data = {
            "amount": to_minor_units(amount),
            "currency": CURRENCY,
            "receipt": receipt,
            "notes": notes,
        }
        try:
            order = await run_in_threadpool(self._client.order.create, data=data)
        except _GATEWAY_ERRORS as exc:
            logger.error("Razorpay rejected order for receipt %s: %s", receipt, exc)
            raise GatewayOrderError(str(exc) or None) from exc
        except Exception as exc:
            logger.exception("Razorpay order creation failed for receipt %s", receipt)
            raise GatewayOrderError() from exc

        logger.info("Created Razorpay order %s for receipt %s", order.get("id"), receipt)
        return order

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        expected = compute_signature(self._key_secret, order_id, payment_id)
        return hmac.compare_digest(expected.encode(), signature.encode())


def build_payment_gateway(config: Settings = settings) -> RazorpayGateway | None:
    if not config.razorpay_configured:
        logger.warning("RAZORPAY_KEY_ID/RAZORPAY_KEY_SECRET not set; donations are disabled")
        return None
    return RazorpayGateway(config.RAZORPAY_KEY_ID, config.RAZORPAY_KEY_SECRET)
