# =============================================================================
# 🚀 Ouhud QR Payloads – Hauptapplikation (main.py)
# =============================================================================

from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# -------------------------------------------------------------------------
# 1️⃣ Konfiguration (.env wird in settings geladen)
# -------------------------------------------------------------------------
import settings
from payloads.errors import QRValidationError
from payloads.reference import get_reference_tables

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------
# 2️⃣ Startup: Referenztabellen einmalig laden
# -------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    tables = get_reference_tables()
    logger.info(f"📚 Referenzdaten geladen: {', '.join(tables.kinds)}")
    yield


# -------------------------------------------------------------------------
# 3️⃣ FastAPI App
# -------------------------------------------------------------------------
app = FastAPI(title=settings.APP_NAME, version="1.0", lifespan=lifespan)


# -------------------------------------------------------------------------
# 4️⃣ Fehlerbehandlung: Validierungsfehler → 400
# -------------------------------------------------------------------------
@app.exception_handler(QRValidationError)
async def qr_validation_error_handler(request: Request, exc: QRValidationError) -> JSONResponse:
    logger.warning(f"⚠️ Ungültige QR-Daten ({request.url.path}): {exc.kind} {exc.field} – {exc.reason}")
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": exc.kind,
            "field": exc.field,
            "details": exc.reason,
        },
    )


# -------------------------------------------------------------------------
# 5️⃣ Routen laden
# -------------------------------------------------------------------------
from routes import qr_codes

app.include_router(qr_codes.router)


# -------------------------------------------------------------------------
# 6️⃣ Health
# -------------------------------------------------------------------------
@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok", "service": settings.APP_NAME}

