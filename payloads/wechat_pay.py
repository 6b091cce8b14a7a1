# payloads/wechat_pay.py
# =============================================================================
# 💚 WeChat Pay – statischer Händler-QR (Phase 1)
# -----------------------------------------------------------------------------
# Der Kunde gibt den Betrag selbst in der WeChat-App ein. Betrag, Beschreibung
# und Bestellnummer landen deshalb nur in den Metadaten, nicht im QR-Inhalt.
# =============================================================================

from __future__ import annotations
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from payloads.base import Payload, compact
from payloads.checks import match_pattern, optional_amount, optional_text, require_text
from payloads.errors import UnsupportedOption
from payloads.normalizers import clean_text, format_amount, strip_separators, upper_code
from payloads.reference import CURRENCY, get_reference_tables

DEFAULT_CURRENCY = "CNY"
STATIC_NOTE = "Static merchant QR - customer enters amount in WeChat app"

_MERCHANT_ID = re.compile(r"\d{10}")
_ORDER_ID = re.compile(r"[A-Za-z0-9_-]+")


@dataclass(frozen=True)
class WeChatPayFields:
    merchant_id: str
    currency: str = DEFAULT_CURRENCY
    amount: Optional[Decimal] = None
    description: Optional[str] = None
    order_id: Optional[str] = None


def validate(raw: Mapping[str, Any]) -> WeChatPayFields:
    merchant_id = strip_separators(require_text(raw, "merchantId"))
    match_pattern("merchantId", merchant_id, _MERCHANT_ID, "Merchant ID must be exactly 10 digits")

    tables = get_reference_tables()
    currency = upper_code(clean_text(raw.get("currency")) or DEFAULT_CURRENCY)
    entry = tables.lookup(CURRENCY, currency)
    if entry is None:
        supported = ", ".join(tables.codes(CURRENCY))
        raise UnsupportedOption("currency", f"Currency must be one of: {supported}")

    amount = optional_amount(
        raw, "amount", entry.constraints["max_amount"], places=2, currency=currency
    )
    description = optional_text(raw, "description", max_len=255)

    order_id = optional_text(raw, "orderId", min_len=1, max_len=32)
    if order_id is not None:
        match_pattern(
            "orderId", order_id, _ORDER_ID,
            "Order ID can only contain alphanumeric characters, underscores, and dashes",
        )

    return WeChatPayFields(merchant_id, currency, amount, description, order_id)


def build(fields: WeChatPayFields) -> Payload:
    url = f"weixin://wxpay/bizpayurl?mchid={fields.merchant_id}"
    metadata = compact({
        "merchantId": fields.merchant_id,
        "currency": fields.currency,
        "amount": fields.amount,
        "formattedAmount": (
            format_amount(fields.amount, fields.currency) if fields.amount is not None else None
        ),
        "description": fields.description,
        "orderId": fields.order_id,
        "wechatPayUrl": url,
        "implementationPhase": "static",
        "note": STATIC_NOTE,
    })
    return Payload("wechat-pay", url, metadata, label="WeChat Pay")
