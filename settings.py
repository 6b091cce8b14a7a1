# =============================================================================
# ⚙️ settings.py
# -----------------------------------------------------------------------------
# Zentrale Konfiguration für den QR Payload Service (.env + Umgebungsvariablen)
# =============================================================================

import os
from dotenv import load_dotenv

# 🔹 .env laden (z. B. aus .env-Datei im Projektverzeichnis)
load_dotenv()

# 🔹 App
APP_NAME = os.getenv("APP_NAME", "Ouhud QR Payloads")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# 🔹 Rendering
QR_DEFAULT_STYLE = os.getenv("QR_DEFAULT_STYLE", "classic")
QR_DEFAULT_SIZE = int(os.getenv("QR_DEFAULT_SIZE", "600"))
QR_MAX_SIZE = int(os.getenv("QR_MAX_SIZE", "2000"))

# 🔹 Referenzdaten: optionale JSON-Datei mit zusätzlichen VietQR-Banken
QR_EXTRA_BANKS_FILE = os.getenv("QR_EXTRA_BANKS_FILE") or None
