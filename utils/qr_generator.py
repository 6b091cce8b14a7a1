# =============================================================================
# 🧠 QR-Code Generator – Ouhud QR Payloads
# -----------------------------------------------------------------------------
# Rendert einen fertigen, kanonischen QR-Inhalt als Bild (PNG / JPEG / WEBP)
# mit Modul-Stil, Farbverlauf und optionalem Rahmen-Text.
# =============================================================================

from __future__ import annotations
from typing import Optional, Tuple
from io import BytesIO
import logging
import qrcode
import qrcode.image.styledpil
import qrcode.image.styles.moduledrawers as mod
import qrcode.image.styles.colormasks as mask
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from PIL import Image, ImageDraw, ImageFont, ImageOps, ImageColor

# ---------------------------------------------------------------------------
# ⚙️ Logging konfigurieren
# ---------------------------------------------------------------------------
logger = logging.getLogger(__name__)

ERROR_CORRECTION_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}

# Ausgabeformat → (Pillow-Format, Media-Type)
IMAGE_FORMATS = {
    "png": ("PNG", "image/png"),
    "jpeg": ("JPEG", "image/jpeg"),
    "webp": ("WEBP", "image/webp"),
}

MODULE_STYLES = ("square", "rounded", "dots", "soft")


def media_type(image_format: str) -> str:
    return IMAGE_FORMATS[image_format][1]


def _module_drawer(module_style: str):
    return {
        "square": mod.SquareModuleDrawer(),
        "rounded": mod.RoundedModuleDrawer(),
        "dots": mod.CircleModuleDrawer(),
        "soft": mod.GappedSquareModuleDrawer(),
    }.get(module_style, mod.SquareModuleDrawer())


def _load_font(size: int = 28):
    try:
        return ImageFont.truetype("arial.ttf", size)
    except OSError:
        logger.debug("🔤 arial.ttf nicht gefunden – nutze Standard-Font")
        return ImageFont.load_default()


# ---------------------------------------------------------------------------
# 🧩 Hauptfunktion: generate_qr_image
# ---------------------------------------------------------------------------

def generate_qr_image(
    payload: str,
    size: int = 600,
    fg: str = "#0D2A78",
    bg: str = "#FFFFFF",
    module_style: str = "square",
    frame_text: Optional[str] = None,
    frame_color: str = "#4F46E5",
    gradient: Optional[Tuple[str, str]] = None,
    error_correction: str = "H",
    image_format: str = "png",
) -> bytes:
    """
    Generiert einen QR-Code mit Designoptionen und gibt die Bild-Bytes zurück.
    Es wird nichts auf die Festplatte geschrieben.
    """

    # === 1️⃣ QR-Code Basis ===
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECTION_LEVELS.get(error_correction.upper(), ERROR_CORRECT_H),
        box_size=10,
        border=4,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    # === 2️⃣ Farbmaske (Gradient oder statisch) ===
    if gradient and len(gradient) == 2:
        color_mask = mask.RadialGradiantColorMask(
            back_color=ImageColor.getrgb(bg),
            center_color=ImageColor.getrgb(gradient[0]),
            edge_color=ImageColor.getrgb(gradient[1]),
        )
    else:
        color_mask = mask.SolidFillColorMask(
            front_color=ImageColor.getrgb(fg),
            back_color=ImageColor.getrgb(bg),
        )

    # === 3️⃣ QR-Code-Bild erzeugen ===
    img = qr.make_image(
        image_factory=qrcode.image.styledpil.StyledPilImage,
        module_drawer=_module_drawer(module_style),
        color_mask=color_mask,
    ).convert("RGBA")

    # === 4️⃣ Rahmen / Text unten ===
    if frame_text:
        padding = 80
        framed_img = Image.new("RGBA", (img.width, img.height + padding), bg)
        framed_img.paste(img, (0, 0))

        draw = ImageDraw.Draw(framed_img)
        font = _load_font()
        text_w = draw.textlength(frame_text, font=font)
        draw.text(
            ((img.width - text_w) // 2, img.height + 10),
            frame_text,
            fill=frame_color,
            font=font,
        )
        img = framed_img

    # === 5️⃣ Finale Skalierung & Rand ===
    height = round(size * img.height / img.width)
    img = img.resize((size, height), Image.Resampling.LANCZOS)
    img = ImageOps.expand(img, border=8, fill=bg)

    # === 6️⃣ Kodieren ===
    pil_format = IMAGE_FORMATS.get(image_format, IMAGE_FORMATS["png"])[0]
    if pil_format == "JPEG":
        # JPEG kennt keinen Alphakanal
        img = img.convert("RGB")

    buffer = BytesIO()
    img.save(buffer, format=pil_format)
    data = buffer.getvalue()
    logger.debug(f"🖼️ QR gerendert ({pil_format}, {size}px, {len(data)} Bytes)")
    return data
