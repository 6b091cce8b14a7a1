# payloads/checks.py
# =============================================================================
# ✅ Gemeinsame Feldprüfungen für alle Validatoren
# -----------------------------------------------------------------------------
# Jede Funktion liest genau ein Feld aus den Rohdaten, normalisiert es und
# wirft beim ersten Regelverstoß einen typisierten QRValidationError.
# =============================================================================

from __future__ import annotations
import re
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Pattern

from payloads.errors import BadFormat, MissingField, OutOfRange, UnsupportedOption
from payloads.normalizers import (
    clean_text,
    fold,
    is_http_url,
    parse_bool,
    parse_datetime,
    parse_decimal,
    parse_int,
    round_amount,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def check_length(
    field: str,
    value: str,
    min_len: Optional[int] = None,
    max_len: Optional[int] = None,
) -> str:
    if min_len is not None and len(value) < min_len:
        raise OutOfRange(field, f"must be at least {min_len} characters")
    if max_len is not None and len(value) > max_len:
        raise OutOfRange(field, f"must not exceed {max_len} characters")
    return value


def require_text(
    raw: Mapping[str, Any],
    field: str,
    min_len: Optional[int] = None,
    max_len: Optional[int] = None,
    reason: Optional[str] = None,
) -> str:
    value = clean_text(raw.get(field))
    if value is None:
        raise MissingField(field, reason or f"{field} is required")
    return check_length(field, value, min_len, max_len)


def optional_text(
    raw: Mapping[str, Any],
    field: str,
    min_len: Optional[int] = None,
    max_len: Optional[int] = None,
) -> Optional[str]:
    value = clean_text(raw.get(field))
    if value is None:
        return None
    return check_length(field, value, min_len, max_len)


def match_pattern(field: str, value: str, pattern: Pattern[str], reason: str) -> str:
    if not pattern.fullmatch(value):
        raise BadFormat(field, reason)
    return value


def check_http_url(field: str, value: str) -> str:
    if not is_http_url(value):
        raise BadFormat(field, "must be a valid URL starting with http:// or https://")
    return value


def optional_url(raw: Mapping[str, Any], field: str) -> Optional[str]:
    value = clean_text(raw.get(field))
    if value is None:
        return None
    return check_http_url(field, value)


def require_url(raw: Mapping[str, Any], field: str) -> str:
    value = clean_text(raw.get(field))
    if value is None:
        raise MissingField(field, f"{field} is required")
    return check_http_url(field, value)


def optional_email(raw: Mapping[str, Any], field: str) -> Optional[str]:
    value = clean_text(raw.get(field))
    if value is None:
        return None
    return match_pattern(field, value, EMAIL_PATTERN, "must be a valid email address")


def choice(
    raw: Mapping[str, Any],
    field: str,
    options: Iterable[str],
    default: Optional[str] = None,
) -> Optional[str]:
    """Enum-Wert (case-folded). Fehlt er, gilt `default`."""
    allowed = tuple(options)
    value = clean_text(raw.get(field))
    if value is None:
        return default
    folded = fold(value)
    if folded not in allowed:
        raise UnsupportedOption(field, f"must be one of: {', '.join(allowed)}")
    return folded


def optional_decimal(raw: Mapping[str, Any], field: str) -> Optional[Decimal]:
    value = raw.get(field)
    if clean_text(value) is None:
        return None
    try:
        return parse_decimal(value)
    except ValueError:
        raise BadFormat(field, "must be a valid number") from None


def optional_int(
    raw: Mapping[str, Any],
    field: str,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Optional[int]:
    value = raw.get(field)
    if clean_text(value) is None:
        return None
    try:
        number = parse_int(value)
    except ValueError:
        raise BadFormat(field, "must be a whole number") from None
    check_range(field, number, minimum, maximum)
    return number


def check_range(
    field: str,
    number: Any,
    minimum: Optional[Any] = None,
    maximum: Optional[Any] = None,
) -> None:
    if minimum is not None and number < minimum:
        raise OutOfRange(field, f"must be at least {minimum:,}")
    if maximum is not None and number > maximum:
        raise OutOfRange(field, f"must not exceed {maximum:,}")


def flag(raw: Mapping[str, Any], field: str, default: bool = False) -> bool:
    value = raw.get(field)
    if value is None:
        return default
    try:
        return parse_bool(value)
    except ValueError:
        raise BadFormat(field, "must be true or false") from None


def optional_datetime(raw: Mapping[str, Any], field: str) -> Optional[datetime]:
    value = raw.get(field)
    if clean_text(value) is None:
        return None
    try:
        return parse_datetime(value)
    except (TypeError, ValueError):
        raise BadFormat(field, "must be an ISO-8601 date/time") from None


def require_datetime(raw: Mapping[str, Any], field: str) -> datetime:
    moment = optional_datetime(raw, field)
    if moment is None:
        raise MissingField(field, f"{field} is required")
    return moment


def optional_mapping(raw: Mapping[str, Any], field: str) -> Optional[Mapping[str, Any]]:
    value = raw.get(field)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise BadFormat(field, "must be an object")
    return value


def optional_list(raw: Mapping[str, Any], field: str) -> Optional[list]:
    value = raw.get(field)
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise BadFormat(field, "must be a list")
    return list(value)


def optional_amount(
    raw: Mapping[str, Any],
    field: str,
    maximum: Decimal,
    places: int,
    currency: str,
) -> Optional[Decimal]:
    """Betrag > 0 und ≤ maximum, kaufmännisch gerundet auf `places` Stellen.

    Die Grenzen gelten für den gerundeten Wert: 0.4 VND wird zu 0 und fällt durch.
    """
    amount = optional_decimal(raw, field)
    if amount is None:
        return None
    rounded = round_amount(amount, places)
    if rounded <= 0:
        raise OutOfRange(field, "Amount must be greater than 0")
    if rounded > maximum:
        raise OutOfRange(field, f"Amount must not exceed {maximum:,} {currency}")
    return rounded
