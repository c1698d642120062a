import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

HOST = os.getenv("INVOICEGEN_HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "5055"))

EXPORT_DIR = Path(os.getenv("INVOICEGEN_EXPORT_DIR", "") or BASE_DIR / "storage" / "exports")

LOG_LEVEL = os.getenv("INVOICEGEN_LOG_LEVEL", "INFO")

# "0", "false", "no" or "off" disable page-stream compression
PDF_COMPRESS = os.getenv("INVOICEGEN_PDF_COMPRESS", "1").strip().lower() not in {"0", "false", "no", "off"}
