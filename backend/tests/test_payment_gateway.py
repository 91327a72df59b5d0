"""Unit tests for the Razorpay adapter and transaction id generation."""

import hashlib
import hmac
from decimal import Decimal

import pytest
from razorpay.errors import GatewayError, ServerError

from charity_api.core.config import Settings
from charity_api.core.exceptions import GatewayOrderError
from charity_api.services.donations import generate_transaction_id
from charity_api.services.payments import (
    RazorpayGateway,
    build_payment_gateway,
    compute_signature,
    to_minor_units,
)
from tests.helpers import FakeRazorpayClient


@pytest.mark.parametrize(
    ("amount", "paise"),
    [
        (Decimal("1"), 100),
        (Decimal("1000"), 100000),
        (Decimal("250.50"), 25050),
        (Decimal("99.99"), 9999),
    ],
)
def test_to_minor_units(amount: Decimal, paise: int):
    assert to_minor_units(amount) == paise


def test_compute_signature_matches_hmac_sha256():
    expected = hmac.new(b"secret", b"order_1|pay_1", hashlib.sha256).hexdigest()
    assert compute_signature("secret", "order_1", "pay_1") == expected


def test_verify_signature():
    gateway = RazorpayGateway("key", "secret", client=FakeRazorpayClient())
    good = compute_signature("secret", "order_1", "pay_1")
    assert gateway.verify_signature("order_1", "pay_1", good)
    assert not gateway.verify_signature("order_1", "pay_1", good.upper())
    assert not gateway.verify_signature("order_1", "pay_2", good)
    assert not gateway.verify_signature("order_1", "pay_1", "")
    assert not gateway.verify_signature(
        "order_1", "pay_1", compute_signature("other-secret", "order_1", "pay_1")
    )


async def test_create_order_sends_paise_and_inr():
    client = FakeRazorpayClient()
    gateway = RazorpayGateway("key", "secret", client=client)

    order = await gateway.create_order(Decimal("12.34"), receipt="TXN1", notes={"a": "b"})

    assert client.order.calls == [
        {"amount": 1234, "currency": "INR", "receipt": "TXN1", "notes": {"a": "b"}}
    ]
    assert order["receipt"] == "TXN1"


@pytest.mark.parametrize("error", [GatewayError("gateway down"), ServerError("boom")])
async def test_create_order_wraps_razorpay_errors(error: Exception):
    gateway = RazorpayGateway("key", "secret", client=FakeRazorpayClient(error=error))
    with pytest.raises(GatewayOrderError) as exc_info:
        await gateway.create_order(Decimal("1"), receipt="TXN1", notes={})
    assert exc_info.value.status == 500
    assert exc_info.value.detail == str(error)


async def test_create_order_wraps_unexpected_errors():
    gateway = RazorpayGateway(
        "key", "secret", client=FakeRazorpayClient(error=ConnectionError("reset"))
    )
    with pytest.raises(GatewayOrderError) as exc_info:
        await gateway.create_order(Decimal("1"), receipt="TXN1", notes={})
    assert exc_info.value.detail == GatewayOrderError.DEFAULT_DETAIL


def test_build_payment_gateway_without_credentials_returns_none():
    config = Settings(RAZORPAY_KEY_ID="", RAZORPAY_KEY_SECRET="")
    assert build_payment_gateway(config) is None

    config = Settings(RAZORPAY_KEY_ID="rzp_test", RAZORPAY_KEY_SECRET="")
    assert build_payment_gateway(config) is None


def test_build_payment_gateway_with_credentials():
    config = Settings(RAZORPAY_KEY_ID="rzp_test", RAZORPAY_KEY_SECRET="shh")
    gateway = build_payment_gateway(config)
    assert isinstance(gateway, RazorpayGateway)
    assert gateway.key_id == "rzp_test"


def test_transaction_id_format():
    txn = generate_transaction_id()
    assert txn.startswith("TXN")
    assert len(txn) == 3 + 13 + 9
    assert txn[3:16].isdigit()
    assert all(c.isdigit() or ("A" <= c <= "Z") for c in txn[16:])
