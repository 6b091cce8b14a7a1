"""
utils/qr_engine.py
────────────────────────────────────────────
Render-Grenze der QR-Payload-Codecs.
- Bekommt einen fertigen, kanonischen QR-Inhalt
- Nutzt: utils/qr_config und utils/qr_generator
- Gibt die Bild-Bytes zurück (PNG / JPEG / WEBP)
────────────────────────────────────────────
"""

from typing import Optional
import logging

import settings
from utils.qr_config import get_qr_style, resolve_style_name
from utils.qr_generator import generate_qr_image

logger = logging.getLogger(__name__)


def clamp_size(size: Optional[int]) -> int:
    if not size:
        return settings.QR_DEFAULT_SIZE
    return max(100, min(int(size), settings.QR_MAX_SIZE))


def render_payload(
    canonical: str,
    style: Optional[str] = None,
    size: Optional[int] = None,
    image_format: str = "png",
    error_correction: Optional[str] = None,
    qr_type: Optional[str] = None,
) -> bytes:
    """
    Rendert den kanonischen QR-Inhalt mit dem gewünschten Stil.
    Ohne expliziten Stil gilt das Standard-Theme des QR-Typs.
    """

    # 1️⃣ Stilkonfiguration laden
    style_name = resolve_style_name(style, qr_type) or settings.QR_DEFAULT_STYLE
    design = get_qr_style(style_name)

    # 2️⃣ Bild erzeugen
    image = generate_qr_image(
        payload=canonical,
        size=clamp_size(size),
        fg=design["fg"],
        bg=design["bg"],
        gradient=design.get("gradient"),
        module_style=design.get("module_style", "square"),
        frame_text=design.get("frame_text"),
        frame_color=str(design.get("frame_color", "#4F46E5")),
        error_correction=error_correction or design.get("error_correction", "H"),
        image_format=image_format,
    )

    logger.debug(f"✅ QR gerendert ({qr_type or 'raw'}, Stil: {style_name})")
    return image
