# payloads/zalo.py
# =============================================================================
# 💬 Zalo – Kontakt-/Chat-Link (https://zalo.me/...)
# -----------------------------------------------------------------------------
# Priorität: phoneNumber > zaloId. Ist eine Telefonnummer gesetzt, wird die
# zaloId komplett ignoriert.
# =============================================================================

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from payloads.base import Payload, compact
from payloads.checks import match_pattern, optional_text
from payloads.errors import BadFormat, MissingField
from payloads.normalizers import clean_text, encode_uri_component, strip_separators
from payloads.reference import VN_MOBILE_PREFIX, get_reference_tables

_VN_PHONE = re.compile(r"(84|0)(\d)(\d{8})")
_ZALO_ID = re.compile(r"[A-Za-z0-9_]{6,30}")
_PHONE_HINT = (
    "Invalid Vietnamese phone number. Format: 84xxxxxxxxx or 0xxxxxxxxx "
    "(must start with 03, 05, 07, 08, or 09)"
)


@dataclass(frozen=True)
class ZaloFields:
    identifier: str
    identifier_type: str
    phone_number: Optional[str] = None
    zalo_id: Optional[str] = None
    display_name: Optional[str] = None
    message: Optional[str] = None


def normalize_vn_phone(value: str) -> str:
    """0912 345 678 / +84912345678 → 84912345678 (wirft BadFormat)."""
    cleaned = strip_separators(value)
    if cleaned.startswith("+"):
        cleaned = cleaned[1:]
    match = _VN_PHONE.fullmatch(cleaned)
    if not match:
        raise BadFormat("phoneNumber", _PHONE_HINT)
    prefix = "0" + match.group(2)
    if get_reference_tables().lookup(VN_MOBILE_PREFIX, prefix) is None:
        raise BadFormat("phoneNumber", _PHONE_HINT)
    return "84" + match.group(2) + match.group(3)


def validate(raw: Mapping[str, Any]) -> ZaloFields:
    phone_raw = clean_text(raw.get("phoneNumber"))
    zalo_raw = clean_text(raw.get("zaloId"))
    if phone_raw is None and zalo_raw is None:
        raise MissingField("phoneNumber", "Either phoneNumber or zaloId is required")

    phone_number = zalo_id = None
    if phone_raw is not None:
        phone_number = normalize_vn_phone(phone_raw)
        identifier, identifier_type = phone_number, "phone"
    else:
        zalo_id = match_pattern(
            "zaloId", zalo_raw, _ZALO_ID,
            "Zalo ID must be 6-30 alphanumeric characters (underscores allowed)",
        )
        identifier, identifier_type = zalo_id, "zaloId"

    display_name = optional_text(raw, "displayName", min_len=2, max_len=100)
    message = optional_text(raw, "message", max_len=500)

    return ZaloFields(identifier, identifier_type, phone_number, zalo_id, display_name, message)


def build(fields: ZaloFields) -> Payload:
    url = f"https://zalo.me/{fields.identifier}"
    if fields.message:
        url += f"?msg={encode_uri_component(fields.message)}"

    metadata = compact({
        "identifier": fields.identifier,
        "identifierType": fields.identifier_type,
        "zaloUrl": url,
        "phoneNumber": fields.phone_number,
        "internationalPhone": f"+{fields.phone_number}" if fields.phone_number else None,
        "zaloId": fields.zalo_id,
        "displayName": fields.display_name,
        "message": fields.message,
    })
    return Payload("zalo", url, metadata, label=fields.display_name or "Zalo")
