# parsers/directions_parser.py
from typing import Any, Dict

from core.errors import RouteUnavailable
from models.route_scan import Route

def parse_osrm_route(data: Dict[str, Any]) -> Route:
    """
    OSRM /route/v1 response (geometries=geojson) → Route.
    distance is metres, duration is seconds, coordinates are [lon, lat].
    """
    if not isinstance(data, dict):
        raise RouteUnavailable("directions provider returned a malformed payload")
    if data.get("code") != "Ok" or not data.get("routes"):
        code = data.get("code")
        raise RouteUnavailable(f"directions provider returned no route (code={code})",
                               {"code": code, "message": data.get("message")})
    r = data["routes"][0]
    coords = ((r.get("geometry") or {}).get("coordinates")) or []
    if len(coords) < 2:
        raise RouteUnavailable("directions provider returned an empty geometry")
    return Route(
        waypoints=[{"latitude": lat, "longitude": lon} for lon, lat in coords],
        distance_km=float(r.get("distance") or 0) / 1000,
        duration_min=float(r.get("duration") or 0) / 60,
    )
