# payloads/vietqr.py
# =============================================================================
# 🇻🇳 VietQR – Zahlungs-QR nach NAPAS-Standard (img.vietqr.io)
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from payloads.base import Payload, compact
from payloads.checks import choice, optional_amount, optional_text, require_text
from payloads.errors import BadFormat
from payloads.normalizers import digits_only, format_amount, plain_amount, upper_code
from payloads.reference import BANK, get_reference_tables

TEMPLATES = ("compact", "print", "qr_only", "default")
MAX_AMOUNT = Decimal("500000000")
VIETQR_IMAGE_BASE = "https://img.vietqr.io/image"


@dataclass(frozen=True)
class VietQRFields:
    bank_code: str
    bank_name: str
    bank_bin: str
    account_number: str
    account_name: str
    amount: Optional[Decimal] = None
    description: Optional[str] = None
    template: str = "compact"


def validate(raw: Mapping[str, Any]) -> VietQRFields:
    tables = get_reference_tables()

    bank_code = upper_code(require_text(raw, "bankCode"))
    bank = tables.lookup(BANK, bank_code)
    if bank is None:
        valid = ", ".join(tables.codes(BANK))
        raise BadFormat("bankCode", f"Invalid bank code. Valid codes: {valid}")

    account_number = digits_only(require_text(raw, "accountNumber"))
    if not 6 <= len(account_number) <= 20:
        raise BadFormat("accountNumber", "Account number must be 6-20 digits")

    account_name = require_text(raw, "accountName", min_len=2, max_len=50)

    amount = optional_amount(raw, "amount", MAX_AMOUNT, places=0, currency="VND")

    description = optional_text(raw, "description", max_len=255)
    template = choice(raw, "template", TEMPLATES, default="compact")

    return VietQRFields(
        bank_code=bank.code,
        bank_name=bank.name,
        bank_bin=bank.identifier or bank.code,
        account_number=account_number,
        account_name=account_name,
        amount=amount,
        description=description,
        template=template,
    )


def build(fields: VietQRFields) -> Payload:
    # feste Reihenfolge: accountName, amount, addInfo
    query = [("accountName", fields.account_name)]
    if fields.amount is not None:
        query.append(("amount", plain_amount(fields.amount)))
    if fields.description:
        query.append(("addInfo", fields.description))

    url = (
        f"{VIETQR_IMAGE_BASE}/{fields.bank_code}-{fields.account_number}-{fields.template}.jpg"
        f"?{urlencode(query)}"
    )

    metadata = compact({
        "bankCode": fields.bank_code,
        "bankName": fields.bank_name,
        "bankBin": fields.bank_bin,
        "accountNumber": fields.account_number,
        "accountName": fields.account_name,
        "amount": fields.amount,
        "formattedAmount": format_amount(fields.amount, "VND") if fields.amount is not None else None,
        "description": fields.description,
        "template": fields.template,
        "vietqrUrl": url,
    })
    return Payload("vietqr", url, metadata, label=f"VietQR - {fields.bank_name}")
