# services/directions_service.py
import logging
from typing import Optional, Protocol, Union

import requests

from core.config import DEFAULT_TIMEOUT, OSRM_URL
from core.errors import RouteUnavailable
from core.geocoding import resolve_location
from core.http_client import http_get
from models.incidents import Coordinate
from models.route_scan import Route
from parsers.directions_parser import parse_osrm_route

Location = Union[str, Coordinate]


class Directions(Protocol):
    """Resolves a drivable route between two locations; raises RouteUnavailable."""

    def get_route(self, start: Location, end: Location) -> Route: ...


class OsrmDirections:
    """Directions backed by an OSRM server (public demo server by default)."""

    def __init__(self, base_url: str = OSRM_URL, profile: str = "driving",
                 timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.timeout = timeout

    def get_route(self, start: Location, end: Location) -> Route:
        a = resolve_location(start, "start")
        b = resolve_location(end, "end")
        url = (f"{self.base_url}/route/v1/{self.profile}/"
               f"{a.longitude},{a.latitude};{b.longitude},{b.latitude}")
        params = {"overview": "full", "geometries": "geojson", "steps": "false",
                  "alternatives": "false"}
        try:
            r = http_get(url, params=params, timeout=self.timeout)
            # OSRM answers 400 with a JSON body (e.g. NoRoute); let the parser report it
            if r.status_code >= 500:
                r.raise_for_status()
            data = r.json()
        except (requests.RequestException, ValueError) as e:
            logging.error(f"[directions] {type(e).__name__}: {e}")
            raise RouteUnavailable(f"directions provider failed: {e}") from e

        route = parse_osrm_route(data)
        logging.info(f"[directions] {len(route.waypoints)} waypoints, "
                     f"{route.distance_km:.1f} km, {route.duration_min:.0f} min")
        return route


_default: Optional[OsrmDirections] = None

def get_directions() -> OsrmDirections:
    global _default
    if _default is None:
        _default = OsrmDirections()
    return _default
