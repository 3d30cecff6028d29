# core/endpoints.py
import os

ENDPOINTS = {
    # Directions provider (route polyline, distance, duration)
    "directions": {
        "osrm": os.getenv("OSRM_URL", "https://router.project-osrm.org").rstrip("/"),
    },

    # Free-text place search, used when the gazetteer has no entry
    "geocoding": {
        "nominatim": os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/search"),
    },

    # Crowdsourced incident reports (GET /api/reports)
    "reports": os.getenv("REPORTS_API_URL", "http://localhost:5000/api/reports").rstrip("/"),
}
