"""
utils/qr_config.py
────────────────────────────────────────────
Globale QR-Code-Design- und Stilkonfiguration
für die QR-Payload-Codecs.

Definiert die benannten Designstile (Farben, Formen, Gradients)
und das Standard-Theme pro QR-Typ.
────────────────────────────────────────────
"""

from typing import Dict, Any, Optional

# ─────────────────────────────────────────────
# 🎨 STANDARDDESIGN (Basis)
# ─────────────────────────────────────────────
QR_DEFAULT_STYLE: Dict[str, Any] = {
    "fg": "#0D2A78",
    "bg": "#FFFFFF",
    "gradient": None,
    "frame_color": "#4F46E5",
    "module_style": "square",
    "frame_text": None,
    "error_correction": "H",
}

# ─────────────────────────────────────────────
# 🪄 THEMES – allgemeine Designvarianten
# ─────────────────────────────────────────────
QR_THEMES: Dict[str, Dict[str, Any]] = {
    "classic": {
        "fg": "#000000",
        "bg": "#FFFFFF",
        "frame_color": "#000000",
        "module_style": "square",
    },
    "modern": {
        "fg": "#0D2A78",
        "gradient": ("#2563EB", "#F472B6"),
        "frame_color": "#4F46E5",
        "module_style": "rounded",
    },
    "rounded": {
        "fg": "#0D2A78",
        "bg": "#F8FAFC",
        "frame_color": "#1E3A8A",
        "module_style": "rounded",
    },
    "dots": {
        "fg": "#2563EB",
        "bg": "#E0E7FF",
        "frame_color": "#3B82F6",
        "module_style": "dots",
    },
    "soft": {
        "fg": "#4F46E5",
        "bg": "#EEF2FF",
        "frame_color": "#4F46E5",
        "module_style": "soft",
    },
    "sunset": {
        "fg": "#F97316",
        "bg": "#FFF7ED",
        "gradient": ("#FB7185", "#F59E0B"),
        "frame_color": "#F97316",
        "module_style": "rounded",
    },
    "ocean": {
        "fg": "#0EA5E9",
        "bg": "#E0F2FE",
        "gradient": ("#0EA5E9", "#22D3EE"),
        "frame_color": "#0EA5E9",
        "module_style": "dots",
    },
    # ── Marken-Themes (Zahlung + Messenger) ──
    # Zahlungscodes: Fehlerkorrektur M
    "vietqr": {
        "fg": "#00529C",
        "bg": "#FFFFFF",
        "frame_color": "#ED1C24",
        "module_style": "square",
        "frame_text": "VietQR",
        "error_correction": "M",
    },
    "wechat": {
        "fg": "#07C160",
        "bg": "#FFFFFF",
        "frame_color": "#07C160",
        "module_style": "square",
        "frame_text": "WeChat Pay",
        "error_correction": "M",
    },
    "zalo": {
        "fg": "#0068FF",
        "bg": "#FFFFFF",
        "frame_color": "#0068FF",
        "module_style": "rounded",
        "frame_text": "Zalo",
    },
    "kakao": {
        "fg": "#3C1E1E",
        "bg": "#FEE500",
        "frame_color": "#3C1E1E",
        "module_style": "rounded",
        "frame_text": "KakaoTalk",
    },
    "line": {
        "fg": "#06C755",
        "bg": "#FFFFFF",
        "frame_color": "#06C755",
        "module_style": "rounded",
        "frame_text": "LINE",
    },
}

# ─────────────────────────────────────────────
# 🧭 Standard-Theme pro QR-Typ
# ─────────────────────────────────────────────
TYPE_DEFAULT_STYLES: Dict[str, str] = {
    "vietqr": "vietqr",
    "wechat-pay": "wechat",
    "zalo": "zalo",
    "kakaotalk": "kakao",
    "line": "line",
    "app-store": "modern",
    "pdf": "classic",
    "video": "sunset",
    "audio": "sunset",
    "multi-url": "modern",
    "business-page": "rounded",
    "coupon": "soft",
    "feedback-form": "soft",
    "wifi": "classic",
    "vcard": "rounded",
    "email": "classic",
    "sms": "classic",
    "event": "ocean",
    "social": "dots",
}


# ─────────────────────────────────────────────
# 🧠 FUNKTION: Design abrufen
# ─────────────────────────────────────────────
def resolve_style_name(style_name: Optional[str], qr_type: Optional[str] = None) -> Optional[str]:
    """Expliziter Stil > Standard-Theme des Typs > None (globaler Default)."""
    if style_name:
        return style_name.strip().lower()
    if qr_type:
        return TYPE_DEFAULT_STYLES.get(qr_type)
    return None


def get_qr_style(style_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Gibt das gewünschte QR-Design als Dictionary zurück.
    Unbekannte Themes fallen auf das Standard-Design zurück.
    """
    style = QR_THEMES.get(style_name or "", {})
    return {**QR_DEFAULT_STYLE, **style}
