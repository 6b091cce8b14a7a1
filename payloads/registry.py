# payloads/registry.py
# =============================================================================
# 🧭 Codec-Registry + Dispatcher
# -----------------------------------------------------------------------------
# QRType ist die geschlossene Liste aller unterstützten Typen. CODECS muss
# jeden Typ abdecken, sonst schlägt bereits der Import fehl.
# =============================================================================

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Mapping

from payloads import (
    app_store,
    audio,
    business_page,
    coupon,
    email,
    event,
    feedback_form,
    kakaotalk,
    line,
    multi_url,
    pdf,
    sms,
    social,
    vcard,
    video,
    vietqr,
    wechat_pay,
    wifi,
    zalo,
)
from payloads.base import Codec, Payload
from payloads.errors import BadFormat, UnsupportedOption


class QRType(str, Enum):
    VIETQR = "vietqr"
    WECHAT_PAY = "wechat-pay"
    ZALO = "zalo"
    KAKAOTALK = "kakaotalk"
    LINE = "line"
    APP_STORE = "app-store"
    PDF = "pdf"
    VIDEO = "video"
    AUDIO = "audio"
    MULTI_URL = "multi-url"
    BUSINESS_PAGE = "business-page"
    COUPON = "coupon"
    FEEDBACK_FORM = "feedback-form"
    WIFI = "wifi"
    VCARD = "vcard"
    EMAIL = "email"
    SMS = "sms"
    EVENT = "event"
    SOCIAL = "social"


CODECS: Dict[QRType, Codec] = {
    QRType.VIETQR: Codec(vietqr.validate, vietqr.build),
    QRType.WECHAT_PAY: Codec(wechat_pay.validate, wechat_pay.build),
    QRType.ZALO: Codec(zalo.validate, zalo.build),
    QRType.KAKAOTALK: Codec(kakaotalk.validate, kakaotalk.build),
    QRType.LINE: Codec(line.validate, line.build),
    QRType.APP_STORE: Codec(app_store.validate, app_store.build),
    QRType.PDF: Codec(pdf.validate, pdf.build),
    QRType.VIDEO: Codec(video.validate, video.build),
    QRType.AUDIO: Codec(audio.validate, audio.build),
    QRType.MULTI_URL: Codec(multi_url.validate, multi_url.build),
    QRType.BUSINESS_PAGE: Codec(business_page.validate, business_page.build),
    QRType.COUPON: Codec(coupon.validate, coupon.build),
    QRType.FEEDBACK_FORM: Codec(feedback_form.validate, feedback_form.build),
    QRType.WIFI: Codec(wifi.validate, wifi.build),
    QRType.VCARD: Codec(vcard.validate, vcard.build),
    QRType.EMAIL: Codec(email.validate, email.build),
    QRType.SMS: Codec(sms.validate, sms.build),
    QRType.EVENT: Codec(event.validate, event.build),
    QRType.SOCIAL: Codec(social.validate, social.build),
}


def check_exhaustive(codecs: Mapping[QRType, Codec]) -> None:
    missing = [qr_type.value for qr_type in QRType if qr_type not in codecs]
    if missing:
        raise RuntimeError(f"No codec registered for QR type(s): {', '.join(missing)}")


check_exhaustive(CODECS)


def resolve_type(type_id: Any) -> QRType:
    """'  VietQR ' → QRType.VIETQR, unbekannt → UnsupportedOption."""
    key = str(type_id or "").strip().lower()
    try:
        return QRType(key)
    except ValueError:
        supported = ", ".join(t.value for t in QRType)
        raise UnsupportedOption("type", f"Unsupported qr type: {key or '<empty>'} (supported: {supported})") from None


def encode(type_id: Any, raw: Any) -> Payload:
    """Validiert `raw` für den Typ und baut den kanonischen Payload.

    Wirft QRValidationError; der Builder wird nur mit validierten Feldern
    aufgerufen.
    """
    qr_type = resolve_type(type_id)
    if not isinstance(raw, Mapping):
        raise BadFormat("data", "QR data must be an object")
    codec = CODECS[qr_type]
    return codec.build(codec.validate(raw))
