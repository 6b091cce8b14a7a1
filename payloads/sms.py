# payloads/sms.py
# =============================================================================
# 💬 SMS QR-Code (sms:+49...?body=...)
# =============================================================================

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from payloads.base import Payload, compact
from payloads.checks import match_pattern, optional_text, require_text
from payloads.normalizers import encode_uri_component, strip_separators

_PHONE = re.compile(r"\+?\d{3,20}")


@dataclass(frozen=True)
class SmsFields:
    phone: str
    message: Optional[str] = None


def validate(raw: Mapping[str, Any]) -> SmsFields:
    phone = strip_separators(require_text(raw, "phone", reason="Phone number is required"))
    match_pattern("phone", phone, _PHONE, "Phone number must contain 3-20 digits")
    message = optional_text(raw, "message", max_len=1000)
    return SmsFields(phone, message)


def build(fields: SmsFields) -> Payload:
    uri = f"sms:{fields.phone}"
    if fields.message:
        uri += f"?body={encode_uri_component(fields.message)}"
    metadata = compact({"phone": fields.phone, "message": fields.message})
    return Payload("sms", uri, metadata, label=f"SMS {fields.phone}")
