# payloads/coupon.py
# =============================================================================
# 🎟️ Coupon QR – Gutscheine, Rabattcodes, Aktionen
# =============================================================================

from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Tuple, Union

from payloads.base import Payload, compact
from payloads.checks import (
    check_length,
    check_range,
    choice,
    match_pattern,
    optional_datetime,
    optional_decimal,
    optional_int,
    optional_text,
    optional_url,
    require_text,
)
from payloads.errors import OutOfRange
from payloads.normalizers import clean_text, plain_amount, upper_code, utc_stamp

DISCOUNT_TYPES = ("percentage", "fixed", "bogo", "free-item", "free-shipping")
DEFAULT_CURRENCY = "VND"

_CODE = re.compile(r"[A-Z0-9_-]+")
_CURRENCY = re.compile(r"[A-Z]{3}")


@dataclass(frozen=True)
class CouponFields:
    code: str
    title: str
    description: Optional[str] = None
    discount_type: Optional[str] = None
    discount_value: Optional[Decimal] = None
    currency: str = DEFAULT_CURRENCY
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    minimum_purchase: Optional[Decimal] = None
    max_uses: Optional[int] = None
    terms: Union[str, Tuple[str, ...], None] = None
    redemption_url: Optional[str] = None
    business_name: Optional[str] = None


def _discount_value(raw: Mapping[str, Any], discount_type: Optional[str]) -> Optional[Decimal]:
    value = optional_decimal(raw, "discountValue")
    if value is None or discount_type is None:
        return None
    if discount_type == "percentage" and not Decimal(0) < value <= Decimal(100):
        raise OutOfRange("discountValue", "Percentage discount must be between 0 and 100")
    if discount_type == "fixed" and value <= 0:
        raise OutOfRange("discountValue", "Fixed discount must be greater than 0")
    return value


def _terms(raw: Mapping[str, Any]) -> Union[str, Tuple[str, ...], None]:
    terms = raw.get("terms")
    if isinstance(terms, (list, tuple)):
        cleaned = []
        for index, term in enumerate(terms):
            value = clean_text(term)
            if value is not None:
                cleaned.append(check_length(f"terms[{index}]", value, max_len=500))
        return tuple(cleaned) or None
    return optional_text(raw, "terms", max_len=2000)


def validate(raw: Mapping[str, Any]) -> CouponFields:
    code = upper_code(require_text(raw, "couponCode", reason="Coupon code is required"))
    check_length("couponCode", code, min_len=3, max_len=50)
    match_pattern(
        "couponCode", code, _CODE,
        "Coupon code can only contain letters, numbers, hyphens, and underscores",
    )

    title = require_text(raw, "title", min_len=2, max_len=200)
    description = optional_text(raw, "description", max_len=1000)

    discount_type = choice(raw, "discountType", DISCOUNT_TYPES)
    discount_value = _discount_value(raw, discount_type)

    currency = upper_code(clean_text(raw.get("currency")) or DEFAULT_CURRENCY)
    match_pattern("currency", currency, _CURRENCY, "Currency must be a 3-letter ISO code")

    valid_from = optional_datetime(raw, "validFrom")
    valid_until = optional_datetime(raw, "validUntil")
    if valid_from and valid_until and valid_from > valid_until:
        raise OutOfRange("validUntil", "Valid from date must be before valid until date")

    minimum_purchase = optional_decimal(raw, "minimumPurchase")
    if minimum_purchase is not None:
        check_range("minimumPurchase", minimum_purchase, minimum=0)

    max_uses = optional_int(raw, "maxUses", minimum=1, maximum=1_000_000)
    terms = _terms(raw)
    redemption_url = optional_url(raw, "redemptionUrl")
    business_name = optional_text(raw, "businessName", max_len=200)

    return CouponFields(
        code=code,
        title=title,
        description=description,
        discount_type=discount_type,
        discount_value=discount_value,
        currency=currency,
        valid_from=valid_from,
        valid_until=valid_until,
        minimum_purchase=minimum_purchase,
        max_uses=max_uses,
        terms=terms,
        redemption_url=redemption_url,
        business_name=business_name,
    )


def build(fields: CouponFields) -> Payload:
    coupon = compact({
        "code": fields.code,
        "title": fields.title,
        "description": fields.description,
        "businessName": fields.business_name,
        "maxUses": fields.max_uses,
        "terms": list(fields.terms) if isinstance(fields.terms, tuple) else fields.terms,
    })
    if fields.discount_type:
        coupon["discount"] = compact({
            "type": fields.discount_type,
            "value": plain_amount(fields.discount_value) if fields.discount_value is not None else None,
            "currency": fields.currency if fields.discount_type == "fixed" else None,
        })
    if fields.valid_from or fields.valid_until:
        coupon["validity"] = compact({
            "from": utc_stamp(fields.valid_from) if fields.valid_from else None,
            "until": utc_stamp(fields.valid_until) if fields.valid_until else None,
        })
    if fields.minimum_purchase is not None:
        coupon["minimumPurchase"] = {
            "amount": plain_amount(fields.minimum_purchase),
            "currency": fields.currency,
        }

    url = fields.redemption_url or f"#coupon-{fields.code}"
    metadata = {
        "coupon": coupon,
        "implementationPhase": "basic-coupon",
        "note": (
            "Using custom redemption URL" if fields.redemption_url
            else "No redemption URL provided - requires custom landing page or POS integration"
        ),
    }
    return Payload("coupon", url, metadata, label=fields.title)
