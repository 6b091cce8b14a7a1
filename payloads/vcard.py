# payloads/vcard.py
# =============================================================================
# 👤 vCard 3.0 – digitale Visitenkarte
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from payloads.base import Payload, compact
from payloads.checks import optional_email, optional_text, optional_url, require_text


@dataclass(frozen=True)
class VCardFields:
    first_name: str
    last_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    title: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None
    note: Optional[str] = None


def escape_vcard(value: str) -> str:
    value = value.replace("\\", "\\\\").replace(";", "\\;").replace(",", "\\,")
    return value.replace("\r\n", "\\n").replace("\n", "\\n")


def validate(raw: Mapping[str, Any]) -> VCardFields:
    return VCardFields(
        first_name=require_text(raw, "firstName", max_len=100, reason="First name is required"),
        last_name=optional_text(raw, "lastName", max_len=100),
        phone=optional_text(raw, "phone", max_len=30),
        email=optional_email(raw, "email"),
        company=optional_text(raw, "company", max_len=200),
        title=optional_text(raw, "title", max_len=200),
        address=optional_text(raw, "address", max_len=500),
        website=optional_url(raw, "website"),
        note=optional_text(raw, "note", max_len=1000),
    )


def build(fields: VCardFields) -> Payload:
    first = escape_vcard(fields.first_name)
    last = escape_vcard(fields.last_name or "")
    full_name = " ".join(filter(None, (fields.first_name, fields.last_name)))

    lines = [
        "BEGIN:VCARD",
        "VERSION:3.0",
        f"N:{last};{first};;;",
        f"FN:{escape_vcard(full_name)}",
    ]
    if fields.company:
        lines.append(f"ORG:{escape_vcard(fields.company)}")
    if fields.title:
        lines.append(f"TITLE:{escape_vcard(fields.title)}")
    if fields.phone:
        lines.append(f"TEL;TYPE=cell:{escape_vcard(fields.phone)}")
    if fields.email:
        lines.append(f"EMAIL;TYPE=internet:{escape_vcard(fields.email)}")
    if fields.address:
        lines.append(f"ADR:;;{escape_vcard(fields.address)};;;;")
    if fields.website:
        lines.append(f"URL:{fields.website}")
    if fields.note:
        lines.append(f"NOTE:{escape_vcard(fields.note)}")
    lines.append("END:VCARD")

    metadata = compact({
        "fullName": full_name,
        "phone": fields.phone,
        "email": fields.email,
        "company": fields.company,
        "title": fields.title,
    })
    return Payload("vcard", "\n".join(lines), metadata, label=full_name)
