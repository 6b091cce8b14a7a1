# payloads/reference.py
# =============================================================================
# 📚 Referenztabellen (Banken, Währungen, Vorwahlen)
# -----------------------------------------------------------------------------
# Statische Lookup-Daten für Validatoren und Builder. Werden einmal pro
# Prozess geladen und danach nur noch lesend verwendet.
# =============================================================================

from __future__ import annotations
import json
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

import settings

BANK = "bank"
CURRENCY = "currency"
VN_MOBILE_PREFIX = "vn_mobile_prefix"
LINE_COUNTRY = "line_country"


@dataclass(frozen=True)
class ReferenceEntry:
    kind: str
    code: str
    name: str
    identifier: Optional[str] = None
    constraints: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", self.code.strip().upper())
        object.__setattr__(self, "constraints", MappingProxyType(dict(self.constraints)))


# ---------------------------------------------------------------------------
# 🏦 VietQR Banken + E-Wallets (Code → Name, BIN)
# ---------------------------------------------------------------------------
VIETQR_BANKS = (
    # Big 4
    ("VCB", "Vietcombank", "970436"),
    ("BIDV", "BIDV", "970418"),
    ("VTB", "VietinBank", "970415"),
    ("ARB", "Agribank", "970405"),
    # Private Banken
    ("TCB", "Techcombank", "970407"),
    ("MB", "MB Bank", "970422"),
    ("ACB", "ACB", "970416"),
    ("VPB", "VPBank", "970432"),
    ("SHB", "SHB", "970443"),
    ("SCB", "SCB", "970429"),
    ("TPB", "TPBank", "970423"),
    ("MSB", "Maritime Bank", "970426"),
    ("STB", "Sacombank", "970403"),
    ("EIB", "Eximbank", "970431"),
    ("OCB", "OCB", "970448"),
    ("NAB", "Nam A Bank", "970428"),
    ("VAB", "VietABank", "970427"),
    ("ABB", "ABBANK", "970425"),
    ("BAB", "BacABank", "970409"),
    ("LPB", "LienVietPostBank", "970449"),
    # E-Wallets
    ("MOMO", "Momo", "MOMO"),
    ("VNPAY", "VNPay", "VNPAY"),
    ("ZALOPAY", "ZaloPay", "ZALOPAY"),
)

WECHAT_CURRENCIES = (
    ("CNY", "Chinese Yuan", Decimal("1000000")),
    ("VND", "Vietnamese Dong", Decimal("5000000000")),
)

VN_MOBILE_PREFIXES = ("03", "05", "07", "08", "09")

LINE_COUNTRIES = (
    ("66", "TH", "Thailand"),
    ("886", "TW", "Taiwan"),
    ("81", "JP", "Japan"),
)


def builtin_entries() -> List[ReferenceEntry]:
    entries = [
        ReferenceEntry(BANK, code, name, identifier=bin_)
        for code, name, bin_ in VIETQR_BANKS
    ]
    entries += [
        ReferenceEntry(CURRENCY, code, name, identifier=code, constraints={"max_amount": limit})
        for code, name, limit in WECHAT_CURRENCIES
    ]
    entries += [
        ReferenceEntry(VN_MOBILE_PREFIX, prefix, f"Vietnam mobile {prefix}", identifier=prefix[1:])
        for prefix in VN_MOBILE_PREFIXES
    ]
    entries += [
        ReferenceEntry(LINE_COUNTRY, dial, name, identifier=iso)
        for dial, iso, name in LINE_COUNTRIES
    ]
    return entries


class ReferenceTables:
    """Schreibgeschützte Sicht: kind → {CODE → ReferenceEntry}."""

    def __init__(self, entries: Iterable[ReferenceEntry]) -> None:
        grouped: Dict[str, Dict[str, ReferenceEntry]] = {}
        for entry in entries:
            grouped.setdefault(entry.kind, {})[entry.code] = entry
        self._tables = MappingProxyType(
            {kind: MappingProxyType(table) for kind, table in grouped.items()}
        )

    def table(self, kind: str) -> Mapping[str, ReferenceEntry]:
        return self._tables.get(kind, MappingProxyType({}))

    def lookup(self, kind: str, code: str) -> Optional[ReferenceEntry]:
        return self.table(kind).get(code.strip().upper())

    def codes(self, kind: str) -> List[str]:
        return list(self.table(kind))

    @property
    def kinds(self) -> List[str]:
        return list(self._tables)


class ReferenceTableLoader:
    """Lädt die eingebauten Tabellen plus optionale Zusatzbanken aus JSON.

    Format der Zusatzdatei: ``[{"code": "XYZ", "name": "XYZ Bank", "bin": "970999"}]``
    """

    def __init__(self, extra_banks_file: Optional[str] = None) -> None:
        self.extra_banks_file = extra_banks_file

    def load(self) -> ReferenceTables:
        entries = builtin_entries()
        if self.extra_banks_file:
            entries += self._load_extra_banks(Path(self.extra_banks_file))
        return ReferenceTables(entries)

    @staticmethod
    def _load_extra_banks(path: Path) -> List[ReferenceEntry]:
        with path.open(encoding="utf-8") as fh:
            rows = json.load(fh)
        if not isinstance(rows, list):
            raise ValueError(f"{path}: expected a JSON list of bank entries")
        return [
            ReferenceEntry(BANK, str(row["code"]), str(row["name"]), identifier=str(row["bin"]))
            for row in rows
        ]


@lru_cache(maxsize=1)
def get_reference_tables() -> ReferenceTables:
    return ReferenceTableLoader(settings.QR_EXTRA_BANKS_FILE).load()
