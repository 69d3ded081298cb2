import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file at the start
load_dotenv()

# Pikud Haoref endpoints
OREF_ALERTS_URL = os.getenv("OREF_ALERTS_URL", "https://www.oref.org.il/WarningMessages/alert/alerts.json")
OREF_HISTORY_URL = os.getenv(
    "OREF_HISTORY_URL", "https://www.oref.org.il/WarningMessages/alert/History/AlertsHistory.json"
)
OREF_WARMUP_URL = os.getenv("OREF_WARMUP_URL", "https://www.oref.org.il/12481-he/Pakar.aspx")

# Chrome-like headers to satisfy the WAF
REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36",
    "Referer": OREF_WARMUP_URL,
    "X-Requested-With": "XMLHttpRequest",
    "Accept": "application/json",
    "Accept-Encoding": "gzip, deflate, br",
}

MIN_REQUEST_INTERVAL_SECONDS = float(os.getenv("OREF_MIN_REQUEST_INTERVAL", "1.0"))
REQUEST_TIMEOUT_SECONDS = float(os.getenv("OREF_REQUEST_TIMEOUT", "30"))

# Server settings
HOST = os.getenv("HOST", "0.0.0.0")
MCP_PORT = int(os.getenv("PORT", os.getenv("MCP_PORT", "8001")))
API_PORT = int(os.getenv("API_PORT", "8000"))
API_RATE_LIMIT = os.getenv("API_RATE_LIMIT", "30/minute")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def configure_logging(level: str = LOG_LEVEL):
    """Configure root logging for the server entry points."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )
