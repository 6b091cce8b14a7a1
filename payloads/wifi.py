# payloads/wifi.py
# =============================================================================
# 📶 WiFi QR-Code (WIFI:T:WPA;S:MyNetwork;P:MyPassword;;)
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from payloads.base import Payload
from payloads.checks import choice, flag, require_text
from payloads.errors import MissingField
from payloads.normalizers import clean_text

ENCRYPTIONS = {"wpa": "WPA", "wep": "WEP", "nopass": "nopass"}


@dataclass(frozen=True)
class WifiFields:
    ssid: str
    encryption: str = "WPA"
    password: Optional[str] = None
    hidden: bool = False


def escape_wifi(value: str) -> str:
    """Maskiert \\ " ; , : (Backslash zuerst)."""
    for char in ("\\", '"', ";", ",", ":"):
        value = value.replace(char, "\\" + char)
    return value


def validate(raw: Mapping[str, Any]) -> WifiFields:
    ssid = require_text(raw, "ssid", reason="SSID is required")
    encryption = ENCRYPTIONS[choice(raw, "encryption", ENCRYPTIONS, default="wpa")]

    # Passwörter werden nicht getrimmt, Leerzeichen können Teil davon sein
    password = raw.get("password")
    password = str(password) if clean_text(password) is not None else None
    if encryption != "nopass" and password is None:
        raise MissingField("password", f"Password is required for {encryption} encryption")
    if encryption == "nopass":
        password = None

    hidden = flag(raw, "hidden")
    return WifiFields(ssid, encryption, password, hidden)


def build(fields: WifiFields) -> Payload:
    wifi = f"WIFI:T:{fields.encryption};S:{escape_wifi(fields.ssid)};"
    if fields.password:
        wifi += f"P:{escape_wifi(fields.password)};"
    if fields.hidden:
        wifi += "H:true;"
    wifi += ";"

    metadata = {"ssid": fields.ssid, "encryption": fields.encryption, "hidden": fields.hidden}
    return Payload("wifi", wifi, metadata, label=f"WiFi - {fields.ssid}")
