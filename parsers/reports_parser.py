# parsers/reports_parser.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from models.incidents import IncidentReport

def safe_float(x):
    try:
        if x is None or x == "":
            return None
        return float(str(x).replace(",", ""))
    except (TypeError, ValueError):
        return None

def _pick(d: dict, *cands):
    for c in cands:
        v = d.get(c)
        if v not in (None, ""):
            return v
    return None

def _latlng(d: dict) -> Optional[Tuple[float, float]]:
    """
    Coordinates come in several shapes depending on the store version:
      - GeoJSON point {"coordinates": {"type": "Point", "coordinates": [lng, lat]}}
      - {"location": {"latitude": .., "longitude": ..}} or {"location": {"coordinates": [lng, lat]}}
      - flat lat/lng keys
    """
    loc = d.get("location") if isinstance(d.get("location"), dict) else {}
    for geo in (d.get("coordinates"), loc.get("coordinates")):
        if isinstance(geo, dict):
            geo = geo.get("coordinates")
        if isinstance(geo, (list, tuple)) and len(geo) >= 2:
            lng, lat = safe_float(geo[0]), safe_float(geo[1])
            if lat is not None and lng is not None:
                return lat, lng
    lat = safe_float(_pick(loc, "latitude", "lat") or _pick(d, "latitude", "lat"))
    lng = safe_float(_pick(loc, "longitude", "lng", "lon") or _pick(d, "longitude", "lng", "lon"))
    if lat is None or lng is None:
        return None
    return lat, lng

def parse_report(d: Dict[str, Any]) -> Optional[IncidentReport]:
    latlng = _latlng(d)
    if latlng is None:
        return None
    loc = d.get("location") if isinstance(d.get("location"), dict) else {}
    return IncidentReport(
        id=str(_pick(d, "_id", "id")),
        type=_pick(d, "type"),
        severity=_pick(d, "severity") or "medium",
        location={"latitude": latlng[0], "longitude": latlng[1]},
        reported_at=_pick(d, "reportedAt", "reported_at", "createdAt"),
        status=_pick(d, "status") or "Active",
        is_active=d.get("isActive", d.get("is_active", True)),
        expires_at=_pick(d, "expiresAt", "expires_at"),
        description=_pick(d, "description"),
        address=_pick(loc, "address"),
    )

def parse_reports(payload: Any) -> List[IncidentReport]:
    """
    Accepts the report API envelope ({"status": "success", "data": {"reports": [...]}})
    or a bare list. Rows without coordinates can never sit on a route and are dropped;
    rows that fail validation are logged and dropped.
    """
    if isinstance(payload, dict):
        rows = (payload.get("data") or {}).get("reports") or payload.get("reports") or []
    else:
        rows = payload or []

    items: List[IncidentReport] = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        try:
            rep = parse_report(row)
        except ValidationError as e:
            logging.warning(f"[reports_parser] invalid report {row.get('_id') or row.get('id')}: "
                            f"{e.error_count()} error(s)")
            continue
        if rep is not None:
            items.append(rep)
    return items
