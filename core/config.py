# core/config.py
import os
from dotenv import load_dotenv, find_dotenv

# .env must be loaded before endpoints.py reads its URLs
load_dotenv(find_dotenv(filename=".env", usecwd=True), override=False)

from .endpoints import ENDPOINTS

# Timeouts
SCAN_TIMEOUT_SEC = float(os.getenv("SCAN_TIMEOUT_SEC", "8"))
DEFAULT_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "6.0"))
RETRY_TOTAL = int(os.getenv("HTTP_RETRY_TOTAL", "2"))

# Matching
ROUTE_TOLERANCE_KM = float(os.getenv("ROUTE_TOLERANCE_KM", "1.5"))
MATCH_WORKERS = int(os.getenv("MATCH_WORKERS", "1"))

# Cache
REPORT_CACHE_TTL_SEC = int(os.getenv("REPORT_CACHE_TTL_SEC", "45"))

# URLs are managed in endpoints.py
OSRM_URL = ENDPOINTS["directions"]["osrm"]
NOMINATIM_URL = ENDPOINTS["geocoding"]["nominatim"]
REPORTS_API_URL = ENDPOINTS["reports"]

GAZETTEER_PATH = os.getenv("GAZETTEER_PATH",
                           os.path.join(os.getcwd(), "gazetteer", "locations.yml"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
