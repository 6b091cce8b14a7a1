# payloads/base.py
# =============================================================================
# 📦 Gemeinsame Typen: Payload + Codec
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, NamedTuple


@dataclass(frozen=True)
class Payload:
    """Ergebnis eines Builders: der exakte QR-Inhalt plus abgeleitete Metadaten."""

    qr_type: str
    canonical: str
    metadata: Mapping[str, Any] = field(default_factory=dict)
    label: str = ""

    def __post_init__(self) -> None:
        # Metadaten werden als schreibgeschützte Kopie abgelegt
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __hash__(self) -> int:
        # MappingProxyType ist nicht hashbar; gleiche Payloads haben denselben QR-Inhalt
        return hash((self.qr_type, self.canonical))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "type": self.qr_type,
            "qr_string": self.canonical,
            "metadata": dict(self.metadata),
            "label": self.label,
        }


class Codec(NamedTuple):
    validate: Callable[[Mapping[str, Any]], Any]
    build: Callable[[Any], Payload]


def compact(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Entfernt None-Werte, damit Metadaten nur gesetzte Felder enthalten."""
    return {key: value for key, value in values.items() if value is not None}
