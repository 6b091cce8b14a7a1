# payloads/pdf.py
# =============================================================================
# 📄 PDF QR – Link auf ein PDF-Dokument (Ansicht oder Download)
# =============================================================================

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

from payloads.base import Payload, compact
from payloads.checks import flag, optional_int, optional_text, require_url
from payloads.errors import BadFormat

_PDF_PATH = re.compile(r"\.pdf$", re.IGNORECASE)


@dataclass(frozen=True)
class PdfFields:
    url: str
    title: Optional[str] = None
    download: bool = False
    file_size: Optional[int] = None


def validate(raw: Mapping[str, Any]) -> PdfFields:
    url = require_url(raw, "url")
    if not _PDF_PATH.search(urlsplit(url).path):
        raise BadFormat("url", "URL must point to a .pdf file")

    title = optional_text(raw, "title", min_len=2, max_len=200)
    download = flag(raw, "download")
    file_size = optional_int(raw, "fileSize", minimum=0)
    return PdfFields(url, title, download, file_size)


def build(fields: PdfFields) -> Payload:
    url = fields.url
    if fields.download and "download=" not in url:
        separator = "&" if "?" in url else "?"
        url = f"{url}{separator}download=1"

    metadata = compact({
        "pdfUrl": fields.url,
        "pdfTitle": fields.title,
        "download": fields.download,
        "fileSize": fields.file_size,
        "note": (
            "Download mode enabled (works with compatible servers)"
            if fields.download else "Opens PDF in browser"
        ),
    })
    return Payload("pdf", url, metadata, label=fields.title or "PDF")
