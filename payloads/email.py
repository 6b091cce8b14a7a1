# payloads/email.py
# =============================================================================
# 📧 E-Mail QR-Code (mailto:)
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from payloads.base import Payload, compact
from payloads.checks import EMAIL_PATTERN, match_pattern, optional_text, require_text
from payloads.normalizers import encode_uri_component


@dataclass(frozen=True)
class EmailFields:
    email: str
    subject: Optional[str] = None
    body: Optional[str] = None


def validate(raw: Mapping[str, Any]) -> EmailFields:
    email = require_text(raw, "email", reason="Valid email address is required")
    match_pattern("email", email, EMAIL_PATTERN, "Valid email address is required")
    subject = optional_text(raw, "subject", max_len=255)
    body = optional_text(raw, "body", max_len=2000)
    return EmailFields(email, subject, body)


def build(fields: EmailFields) -> Payload:
    params = []
    if fields.subject:
        params.append(f"subject={encode_uri_component(fields.subject)}")
    if fields.body:
        params.append(f"body={encode_uri_component(fields.body)}")

    uri = f"mailto:{fields.email}"
    if params:
        uri += "?" + "&".join(params)

    metadata = compact({"email": fields.email, "subject": fields.subject})
    return Payload("email", uri, metadata, label=fields.email)
