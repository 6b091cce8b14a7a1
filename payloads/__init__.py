# payloads/__init__.py
# =============================================================================
# 🧩 QR Payload Codecs – Validierung + kanonische QR-Inhalte für 19 Typen
# =============================================================================

from payloads.base import Codec, Payload
from payloads.errors import (
    BadFormat,
    MissingField,
    MutuallyExclusive,
    OutOfRange,
    QRValidationError,
    UnsupportedOption,
)

__all__ = [
    "BadFormat",
    "Codec",
    "MissingField",
    "MutuallyExclusive",
    "OutOfRange",
    "Payload",
    "QRValidationError",
    "UnsupportedOption",
]
