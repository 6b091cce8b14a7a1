from decimal import Decimal

import pytest

from payloads.errors import BadFormat, MissingField, OutOfRange, UnsupportedOption
from payloads.registry import encode


def test_wechat_pay_defaults_to_cny():
    payload = encode("wechat-pay", {"merchantId": "1234567890"})
    assert payload.canonical == "weixin://wxpay/bizpayurl?mchid=1234567890"
    assert payload.metadata["currency"] == "CNY"
    assert payload.metadata["implementationPhase"] == "static"
    assert "amount" not in payload.metadata


def test_wechat_pay_merchant_id_separators_are_removed():
    payload = encode("wechat-pay", {"merchantId": "1234-567 890"})
    assert payload.metadata["merchantId"] == "1234567890"


def test_wechat_pay_amount_stays_out_of_static_qr():
    """Statischer QR: der Betrag landet nur in den Metadaten."""
    low = encode("wechat-pay", {"merchantId": "1234567890", "amount": 100})
    high = encode("wechat-pay", {"merchantId": "1234567890", "amount": 200})
    assert low.canonical == high.canonical
    assert low.metadata["amount"] != high.metadata["amount"]


def test_wechat_pay_amount_rounded_to_fen():
    payload = encode("wechat-pay", {"merchantId": "1234567890", "amount": "1234.505"})
    assert payload.metadata["amount"] == Decimal("1234.51")
    assert payload.metadata["formattedAmount"] == "¥1,234.51"


def test_wechat_pay_ceiling_depends_on_currency():
    with pytest.raises(OutOfRange) as exc:
        encode("wechat-pay", {"merchantId": "1234567890", "amount": 1000001})
    assert "1,000,000 CNY" in exc.value.reason

    payload = encode("wechat-pay", {"merchantId": "1234567890", "currency": "vnd", "amount": 1000001})
    assert payload.metadata["currency"] == "VND"
    assert payload.metadata["formattedAmount"] == "1.000.001 ₫"


@pytest.mark.parametrize("raw, error, field", [
    ({}, MissingField, "merchantId"),
    ({"merchantId": "12345"}, BadFormat, "merchantId"),
    ({"merchantId": "12345678901"}, BadFormat, "merchantId"),
    ({"merchantId": "1234567890", "currency": "usd"}, UnsupportedOption, "currency"),
    ({"merchantId": "1234567890", "amount": 0}, OutOfRange, "amount"),
    ({"merchantId": "1234567890", "amount": "0.004"}, OutOfRange, "amount"),
    ({"merchantId": "1234567890", "currency": "VND", "amount": 5000000001}, OutOfRange, "amount"),
    ({"merchantId": "1234567890", "orderId": "ORDER#1"}, BadFormat, "orderId"),
    ({"merchantId": "1234567890", "orderId": "A" * 33}, OutOfRange, "orderId"),
    ({"merchantId": "1234567890", "description": "x" * 256}, OutOfRange, "description"),
])
def test_wechat_pay_rejections(raw, error, field):
    with pytest.raises(error) as exc:
        encode("wechat-pay", raw)
    assert exc.value.field == field


def test_wechat_pay_ceiling_is_inclusive():
    cny = encode("wechat-pay", {"merchantId": "1234567890", "amount": 1000000})
    vnd = encode("wechat-pay", {"merchantId": "1234567890", "currency": "VND", "amount": 5000000000})
    assert cny.metadata["amount"] == Decimal("1000000")
    assert vnd.metadata["amount"] == Decimal("5000000000")


def test_wechat_pay_smallest_amount_is_one_fen():
    payload = encode("wechat-pay", {"merchantId": "1234567890", "amount": "0.005"})
    assert payload.metadata["amount"] == Decimal("0.01")


def test_wechat_pay_order_id_accepted():
    payload = encode("wechat-pay", {"merchantId": "1234567890", "orderId": "order_2024-01"})
    assert payload.metadata["orderId"] == "order_2024-01"
