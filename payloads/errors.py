# payloads/errors.py
# =============================================================================
# ❌ Fehler-Taxonomie der Payload-Codecs
# -----------------------------------------------------------------------------
# Jeder Validator meldet genau einen Fehler (der erste verletzte Regelpunkt).
# Builder werfen nie – sie bekommen ausschließlich validierte Felder.
# =============================================================================

from __future__ import annotations
from typing import Dict


class QRValidationError(ValueError):
    """Basisklasse: Feldname + lesbarer Grund."""

    kind = "ValidationError"

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "field": self.field, "reason": self.reason}


class MissingField(QRValidationError):
    kind = "MissingField"


class OutOfRange(QRValidationError):
    kind = "OutOfRange"


class BadFormat(QRValidationError):
    kind = "BadFormat"


class MutuallyExclusive(QRValidationError):
    kind = "MutuallyExclusive"


class UnsupportedOption(QRValidationError):
    kind = "UnsupportedOption"
