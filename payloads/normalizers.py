# payloads/normalizers.py
# =============================================================================
# 🧹 Feld-Normalisierer
# -----------------------------------------------------------------------------
# Reine Funktionen ohne Seiteneffekte. Jede Funktion ist idempotent:
# f(f(x)) == f(x). Fehler werden hier NICHT geworfen (außer in den parse_*
# Helfern, die ValueError für die Validatoren liefern).
# =============================================================================

from __future__ import annotations
import math
import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional
from urllib.parse import quote, urlsplit

_WHITESPACE = re.compile(r"\s+")
_SEPARATORS = re.compile(r"[\s\-()]")
_NON_DIGITS = re.compile(r"\D")

# encodeURIComponent lässt genau diese Zeichen unkodiert
_URI_COMPONENT_SAFE = "-_.!~*'()"


def clean_text(value: Any) -> Optional[str]:
    """None, "" und reine Leerzeichen → None, sonst getrimmter String."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def strip_whitespace(value: str) -> str:
    return _WHITESPACE.sub("", value)


def strip_separators(value: str) -> str:
    """Entfernt Leerzeichen, Bindestriche und Klammern (Telefon, IDs)."""
    return _SEPARATORS.sub("", value)


def digits_only(value: str) -> str:
    return _NON_DIGITS.sub("", value)


def upper_code(value: str) -> str:
    """Kurzcodes (Bank, Währung, Coupon) → Großbuchstaben."""
    return value.strip().upper()


def fold(value: str) -> str:
    """Enum-Werte (Template, Plattform, …) → getrimmt + kleingeschrieben."""
    return value.strip().lower()


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def is_http_url(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme.lower() in {"http", "https"} and bool(parts.netloc)


# -----------------------------------------------------------------------------
# 🔢 Parser (werfen ValueError – die Validatoren übersetzen in BadFormat)
# -----------------------------------------------------------------------------
def parse_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("not a finite number")
    text = str(value).strip().replace(" ", "")
    try:
        number = Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"not a number: {value!r}") from exc
    if not number.is_finite():
        raise ValueError("not a finite number")
    return number


def parse_int(value: Any) -> int:
    number = parse_decimal(value)
    if number != number.to_integral_value():
        raise ValueError(f"not an integer: {value!r}")
    return int(number)


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"", "0", "false", "no", "off"}:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def parse_datetime(value: Any) -> datetime:
    """ISO-8601 → timezone-aware UTC. Naive Werte gelten als UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# -----------------------------------------------------------------------------
# 💰 Beträge
# -----------------------------------------------------------------------------
def round_amount(amount: Decimal, places: int) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return amount.quantize(quantum, rounding=ROUND_HALF_UP)


def plain_amount(amount: Decimal) -> str:
    """Maschinenlesbare Ziffernfolge für den kanonischen String (kein Locale)."""
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def json_number(amount: Decimal):
    """Decimal → int (ganzzahlig) oder float, für JSON-Antworten."""
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def format_amount(amount: Decimal, currency: str) -> str:
    """Anzeigeformat für Metadaten, z. B. '100.000 ₫' oder '¥1,234.50'."""
    if currency == "VND":
        grouped = f"{round_amount(amount, 0):,.0f}".replace(",", ".")
        return f"{grouped} ₫"
    if currency == "CNY":
        return f"¥{round_amount(amount, 2):,.2f}"
    return f"{currency} {plain_amount(amount)}"


def utc_stamp(moment: datetime) -> str:
    """ISO-Zeitstempel in UTC mit 'Z'-Suffix, sekundengenau."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
