# payloads/business_page.py
# =============================================================================
# 🏪 Business Page QR – digitale Visitenkarte eines Unternehmens
# -----------------------------------------------------------------------------
# Der QR zeigt auf die Landing Page oder die Website; alle übrigen Angaben
# (Adresse, Öffnungszeiten, Social Links, …) werden als Metadaten geliefert.
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from payloads.base import Payload, compact
from payloads.checks import (
    check_length,
    optional_email,
    optional_list,
    optional_mapping,
    optional_text,
    optional_url,
    require_text,
)
from payloads.errors import BadFormat, MissingField, OutOfRange
from payloads.normalizers import clean_text, is_http_url

ADDRESS_KEYS = ("street", "city", "state", "country", "postalCode")
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
SOCIAL_PLATFORMS = (
    "facebook", "instagram", "twitter", "x", "linkedin", "tiktok", "youtube",
    "whatsapp", "zalo", "line", "kakaotalk", "wechat", "website",
)
MAX_CATEGORIES = 10


@dataclass(frozen=True)
class BusinessPageFields:
    business_name: str
    destination: str
    description: Optional[str] = None
    website_url: Optional[str] = None
    landing_page_url: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Mapping[str, str]] = None
    business_hours: Optional[Mapping[str, str]] = None
    social_links: Optional[Mapping[str, str]] = None
    categories: Tuple[str, ...] = ()
    logo: Optional[str] = None
    cover_image: Optional[str] = None


def _pick(source: Optional[Mapping[str, Any]], keys: Tuple[str, ...]) -> Optional[Mapping[str, str]]:
    """Übernimmt nur bekannte Schlüssel mit nicht-leerem Wert."""
    if not source:
        return None
    picked = {}
    for key in keys:
        value = clean_text(source.get(key))
        if value is not None:
            picked[key] = value
    return MappingProxyType(picked) if picked else None


def _social_links(raw: Mapping[str, Any]) -> Optional[Mapping[str, str]]:
    links = _pick(optional_mapping(raw, "socialLinks"), SOCIAL_PLATFORMS)
    if links and "website" in links and not is_http_url(links["website"]):
        raise BadFormat("socialLinks.website", "Website must start with http:// or https://")
    return links


def _categories(raw: Mapping[str, Any]) -> Tuple[str, ...]:
    items = optional_list(raw, "categories") or []
    if len(items) > MAX_CATEGORIES:
        raise OutOfRange("categories", f"Maximum {MAX_CATEGORIES} categories allowed")
    cleaned = []
    for index, item in enumerate(items):
        value = clean_text(item)
        if value is None:
            continue
        cleaned.append(check_length(f"categories[{index}]", value, max_len=50))
    return tuple(cleaned)


def validate(raw: Mapping[str, Any]) -> BusinessPageFields:
    business_name = require_text(raw, "businessName", min_len=2, max_len=200)
    description = optional_text(raw, "description", max_len=1000)
    website_url = optional_url(raw, "websiteUrl")
    email = optional_email(raw, "email")
    phone = optional_text(raw, "phone", min_len=8, max_len=20)
    address = _pick(optional_mapping(raw, "address"), ADDRESS_KEYS)
    hours = optional_mapping(raw, "businessHours")
    business_hours = _pick({k.lower(): v for k, v in hours.items()} if hours else None, WEEKDAYS)
    social_links = _social_links(raw)
    categories = _categories(raw)
    logo = optional_url(raw, "logo")
    cover_image = optional_url(raw, "coverImage")
    landing_page_url = optional_url(raw, "landingPageUrl")

    destination = landing_page_url or website_url
    if destination is None:
        raise MissingField("websiteUrl", "Either landingPageUrl or websiteUrl is required")

    return BusinessPageFields(
        business_name=business_name,
        destination=destination,
        description=description,
        website_url=website_url,
        landing_page_url=landing_page_url,
        email=email,
        phone=phone,
        address=address,
        business_hours=business_hours,
        social_links=social_links,
        categories=categories,
        logo=logo,
        cover_image=cover_image,
    )


def build(fields: BusinessPageFields) -> Payload:
    info = compact({
        "name": fields.business_name,
        "description": fields.description,
        "website": fields.website_url,
        "email": fields.email,
        "phone": fields.phone,
        "address": dict(fields.address) if fields.address else None,
        "businessHours": dict(fields.business_hours) if fields.business_hours else None,
        "socialLinks": dict(fields.social_links) if fields.social_links else None,
        "categories": list(fields.categories) or None,
        "logo": fields.logo,
        "coverImage": fields.cover_image,
    })
    metadata = {
        "businessInfo": info,
        "implementationPhase": "basic-info",
        "note": (
            "Using custom landing page URL"
            if fields.landing_page_url else "Using business website as primary URL"
        ),
    }
    return Payload("business-page", fields.destination, metadata, label=fields.business_name)
