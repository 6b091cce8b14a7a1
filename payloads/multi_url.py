# payloads/multi_url.py
# =============================================================================
# 🔀 Multi-URL QR – mehrere Ziele, ein QR-Code
# -----------------------------------------------------------------------------
# Phase "direct-primary": Der QR zeigt auf die Landing Page (falls gesetzt)
# oder auf die per Strategie gewählte Primär-URL. Alle Ziele stehen in den
# Metadaten, sortiert nach Priorität.
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from payloads.base import Payload, compact
from payloads.checks import check_http_url, choice, optional_list, optional_text, optional_url
from payloads.errors import BadFormat, MissingField, OutOfRange, UnsupportedOption
from payloads.normalizers import clean_text, fold, parse_int

DEVICES = ("all", "ios", "android", "desktop", "mobile")
STRATEGIES = ("primary", "device", "choice", "priority")
DEFAULT_TITLE = "Choose Your Link"
MIN_URLS, MAX_URLS = 2, 10


@dataclass(frozen=True)
class LinkEntry:
    url: str
    label: str
    device: str = "all"
    priority: int = 1
    description: Optional[str] = None

    def as_dict(self) -> dict:
        return compact({
            "url": self.url,
            "label": self.label,
            "device": self.device,
            "priority": self.priority,
            "description": self.description,
        })


@dataclass(frozen=True)
class MultiUrlFields:
    urls: Tuple[LinkEntry, ...]
    title: str = DEFAULT_TITLE
    routing_strategy: str = "primary"
    landing_page_url: Optional[str] = None


def _entry(raw: Any, index: int) -> LinkEntry:
    prefix = f"urls[{index}]"
    if not isinstance(raw, Mapping):
        raise BadFormat(prefix, f"URL entry {index + 1} must be an object")

    url = clean_text(raw.get("url"))
    if url is None:
        raise MissingField(f"{prefix}.url", f"URL entry {index + 1} is missing 'url' field")
    check_http_url(f"{prefix}.url", url)

    label = clean_text(raw.get("label")) or f"Link {index + 1}"
    if len(label) > 100:
        raise OutOfRange(f"{prefix}.label", "Label must not exceed 100 characters")

    device = fold(clean_text(raw.get("device")) or "all")
    if device not in DEVICES:
        raise UnsupportedOption(f"{prefix}.device", f"Device must be one of: {', '.join(DEVICES)}")

    priority = index + 1
    if clean_text(raw.get("priority")) is not None:
        try:
            priority = parse_int(raw["priority"])
        except ValueError:
            raise BadFormat(f"{prefix}.priority", "Priority must be a whole number") from None
    if not 1 <= priority <= 100:
        raise OutOfRange(f"{prefix}.priority", "Priority must be between 1 and 100")

    return LinkEntry(url, label, device, priority, clean_text(raw.get("description")))


def validate(raw: Mapping[str, Any]) -> MultiUrlFields:
    entries = optional_list(raw, "urls")
    if entries is None:
        raise MissingField("urls", "urls must be a list of 2-10 entries")
    if len(entries) < MIN_URLS:
        raise OutOfRange("urls", f"Multi-URL QR requires at least {MIN_URLS} URLs")
    if len(entries) > MAX_URLS:
        raise OutOfRange("urls", f"Multi-URL QR supports maximum {MAX_URLS} URLs")
    urls = tuple(_entry(item, i) for i, item in enumerate(entries))

    title = optional_text(raw, "title", min_len=2, max_len=200) or DEFAULT_TITLE
    strategy = choice(raw, "routingStrategy", STRATEGIES, default="primary")
    landing_page_url = optional_url(raw, "landingPageUrl")
    return MultiUrlFields(urls, title, strategy, landing_page_url)


def by_priority(urls: Tuple[LinkEntry, ...]) -> Tuple[LinkEntry, ...]:
    # sorted() ist stabil: gleiche Priorität behält die Eingabereihenfolge
    return tuple(sorted(urls, key=lambda entry: entry.priority))


def primary_url(fields: MultiUrlFields) -> str:
    if fields.routing_strategy == "priority":
        return by_priority(fields.urls)[0].url
    if fields.routing_strategy == "device":
        for entry in fields.urls:
            if entry.device == "all":
                return entry.url
    return fields.urls[0].url


def build(fields: MultiUrlFields) -> Payload:
    primary = primary_url(fields)
    url = fields.landing_page_url or primary
    metadata = compact({
        "primaryUrl": primary,
        "urls": [entry.as_dict() for entry in by_priority(fields.urls)],
        "title": fields.title,
        "routingStrategy": fields.routing_strategy,
        "urlCount": len(fields.urls),
        "landingPageUrl": fields.landing_page_url,
        "implementationPhase": "direct-primary",
        "note": (
            "Using custom landing page for multi-URL routing"
            if fields.landing_page_url
            else "Currently using primary URL. Deploy landing page service for full multi-URL functionality."
        ),
    })
    return Payload("multi-url", url, metadata, label=fields.title)
