# routes/qr_codes.py
# =============================================================================
# 🚀 QR-Code Routes – Payload erzeugen, rendern, Referenzdaten
# =============================================================================

from __future__ import annotations

import base64
import logging
from decimal import Decimal
from typing import Any, Literal, Optional

from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder
from fastapi.responses import Response
from pydantic import BaseModel, Field

from payloads.normalizers import json_number
from payloads.reference import BANK, CURRENCY, get_reference_tables
from payloads.registry import QRType, encode
from utils.qr_engine import render_payload
from utils.qr_generator import media_type
from utils.qr_schema import describe_all

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/qr", tags=["QR Codes"])


class CreateQRIn(BaseModel):
    data: dict[str, Any] = Field(default_factory=dict, description="Type-specific fields")
    title: Optional[str] = Field(default=None, max_length=200)
    style: Optional[str] = Field(default=None, description="Theme name")
    size: Optional[int] = Field(default=None, ge=100, le=4000)
    format: Literal["png", "jpeg", "webp"] = "png"


def _render(qr_type: str, payload: CreateQRIn):
    result = encode(qr_type, payload.data)
    image = render_payload(
        result.canonical,
        style=payload.style,
        size=payload.size,
        image_format=payload.format,
        qr_type=result.qr_type,
    )
    return result, image


# =============================================================================
# 📚 Referenzdaten
# =============================================================================

@router.get("/types")
def list_types() -> dict:
    """Alle unterstützten QR-Typen mit Feldkatalog."""
    return {"success": True, "data": describe_all([t.value for t in QRType])}


@router.get("/vietqr/banks")
def list_banks() -> dict:
    banks = [
        {"code": entry.code, "name": entry.name, "bin": entry.identifier}
        for entry in get_reference_tables().table(BANK).values()
    ]
    return {"success": True, "data": banks}


@router.get("/wechat-pay/currencies")
def list_currencies() -> dict:
    currencies = [
        {"code": entry.code, "name": entry.name, "maxAmount": json_number(entry.constraints["max_amount"])}
        for entry in get_reference_tables().table(CURRENCY).values()
    ]
    return {"success": True, "data": currencies}


# =============================================================================
# ✅ QR erzeugen
# =============================================================================

@router.post("/{qr_type}")
def create_qr(qr_type: str, payload: CreateQRIn) -> dict:
    """Validiert die Daten, baut den QR-Inhalt und liefert ihn inkl. Bild (Data-URL)."""
    result, image = _render(qr_type, payload)
    encoded = base64.b64encode(image).decode("ascii")
    logger.info(f"✅ QR erstellt: {result.qr_type} ({len(result.canonical)} Zeichen)")
    return {
        "success": True,
        "data": {
            "type": result.qr_type,
            "qr_string": result.canonical,
            "qr_image": f"data:{media_type(payload.format)};base64,{encoded}",
            # Beträge als JSON-Zahlen, nicht als Decimal-Strings
            "metadata": jsonable_encoder(dict(result.metadata), custom_encoder={Decimal: json_number}),
            "title": payload.title or result.label,
        },
    }


@router.post("/{qr_type}/image")
def create_qr_image(qr_type: str, payload: CreateQRIn) -> Response:
    """Wie create_qr, liefert aber direkt die Bild-Bytes."""
    result, image = _render(qr_type, payload)
    logger.info(f"🖼️ QR-Bild erstellt: {result.qr_type} ({payload.format})")
    return Response(content=image, media_type=media_type(payload.format))
