# payloads/line.py
# =============================================================================
# 💚 LINE – Official Account, LINE ID oder Telefonnummer (TH / TW / JP)
# -----------------------------------------------------------------------------
# Priorität: officialAccountId > lineId > phoneNumber
# =============================================================================

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from payloads.base import Payload, compact
from payloads.checks import match_pattern, optional_text
from payloads.errors import BadFormat, MissingField
from payloads.normalizers import clean_text, encode_uri_component, strip_separators
from payloads.reference import LINE_COUNTRY, get_reference_tables

_OFFICIAL_ACCOUNT = re.compile(r"@[A-Za-z0-9_]{3,20}")
_LINE_ID = re.compile(r"[A-Za-z0-9._]{4,20}")
_LINE_PHONE = re.compile(r"\+?(66|886|81)(\d{8,10})")


@dataclass(frozen=True)
class LineFields:
    identifier: str
    identifier_type: str
    account_type: str
    country_code: Optional[str] = None
    country_name: Optional[str] = None
    dial_code: Optional[str] = None
    display_name: Optional[str] = None
    message: Optional[str] = None


def validate(raw: Mapping[str, Any]) -> LineFields:
    official = clean_text(raw.get("officialAccountId"))
    line_id = clean_text(raw.get("lineId"))
    phone = clean_text(raw.get("phoneNumber"))
    country = None

    if official is not None:
        identifier = match_pattern(
            "officialAccountId", official, _OFFICIAL_ACCOUNT,
            "Official Account ID must start with @ followed by 3-20 characters (e.g., @businessname)",
        )
        identifier_type, account_type = "officialAccount", "business"
    elif line_id is not None:
        identifier = match_pattern(
            "lineId", line_id, _LINE_ID,
            "LINE ID must be 4-20 characters (alphanumeric, periods, and underscores allowed)",
        )
        identifier_type, account_type = "lineId", "personal"
    elif phone is not None:
        match = _LINE_PHONE.fullmatch(strip_separators(phone))
        if not match:
            raise BadFormat(
                "phoneNumber",
                "Invalid phone number. Supported countries: Thailand (+66), Taiwan (+886), Japan (+81)",
            )
        dial, number = match.groups()
        country = get_reference_tables().lookup(LINE_COUNTRY, dial)
        if country is None:
            raise BadFormat("phoneNumber", f"Unsupported country dial code +{dial}")
        identifier = f"+{dial}{number}"
        identifier_type, account_type = "phone", "personal"
    else:
        raise MissingField(
            "officialAccountId", "Either lineId, phoneNumber, or officialAccountId is required"
        )

    display_name = optional_text(raw, "displayName", min_len=2, max_len=100)
    message = optional_text(raw, "message", max_len=500)

    return LineFields(
        identifier=identifier,
        identifier_type=identifier_type,
        account_type=account_type,
        country_code=country.identifier if country else None,
        country_name=country.name if country else None,
        dial_code=f"+{country.code}" if country else None,
        display_name=display_name,
        message=message,
    )


def build(fields: LineFields) -> Payload:
    if fields.identifier_type == "officialAccount":
        url = f"https://line.me/R/ti/p/{fields.identifier}"
    elif fields.identifier_type == "lineId":
        url = f"https://line.me/ti/p/~{fields.identifier}"
    else:
        url = f"https://line.me/ti/p/{fields.identifier}"
    if fields.message:
        url += f"?msg={encode_uri_component(fields.message)}"

    country = None
    if fields.country_code:
        country = {"code": fields.country_code, "name": fields.country_name, "dialCode": fields.dial_code}

    metadata = compact({
        "identifier": fields.identifier,
        "identifierType": fields.identifier_type,
        "accountType": fields.account_type,
        "lineUrl": url,
        "country": country,
        "displayName": fields.display_name,
        "message": fields.message,
    })
    return Payload("line", url, metadata, label=fields.display_name or "LINE")
