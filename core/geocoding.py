# core/geocoding.py
import re, logging
from functools import lru_cache
from typing import Any, Optional, Tuple, Union

import requests
from pydantic import ValidationError

from core.config import NOMINATIM_URL
from core.errors import InvalidInput, RouteUnavailable
from core.gazetteer import lookup
from core.http_client import http_get
from models.incidents import Coordinate

LATLNG = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")

def parse_latlng(text: str) -> Optional[Coordinate]:
    """'28.61, 77.20' → Coordinate; None if the text is not a lat,lng pair."""
    m = LATLNG.match(text or "")
    if not m:
        return None
    lat, lng = float(m.group(1)), float(m.group(2))
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise InvalidInput(f"coordinates out of range: {text}",
                           {"latitude": lat, "longitude": lng})
    return Coordinate(latitude=lat, longitude=lng)

@lru_cache(maxsize=512)
def _search(place: str) -> Optional[Tuple[float, float, str]]:
    # raises on transport errors so that failures are never cached
    r = http_get(NOMINATIM_URL,
                 params={"q": place, "format": "json", "limit": 1})
    r.raise_for_status()
    arr = r.json()
    if not arr:
        return None
    it = arr[0]
    return float(it["lat"]), float(it["lon"]), it.get("display_name") or place

def geocode(place: str) -> Optional[Tuple[float, float, str]]:
    """Nominatim free-text search. Returns (lat, lng, label) or None."""
    if not place:
        return None
    try:
        return _search(place)
    except (requests.RequestException, ValueError) as e:
        logging.warning(f"[geocoding] nominatim failed for {place!r}: {type(e).__name__}: {e}")
        return None

def coerce_location(loc: Any, field: str = "location") -> Union[str, Coordinate]:
    """
    Request input → str or Coordinate. Coordinate-shaped dicts are validated
    here so that an out-of-range object is InvalidInput, like a bad "lat,lng" string.
    """
    if isinstance(loc, Coordinate):
        return loc
    if isinstance(loc, dict):
        try:
            return Coordinate.model_validate(loc)
        except ValidationError as e:
            raise InvalidInput(f"{field} is not a valid coordinate",
                               {"field": field, "errors": e.error_count()}) from e
    if loc is None or not str(loc).strip():
        raise InvalidInput(f"{field} is required", {"field": field})
    text = str(loc).strip()
    parse_latlng(text)  # raises InvalidInput for out-of-range literals
    return text

def resolve_location(loc: Union[str, Coordinate, None], field: str = "location") -> Coordinate:
    """
    Turn a start/end input into a Coordinate.
      - Coordinate → returned as is
      - "lat,lng" → parsed
      - place name → gazetteer, then Nominatim
    Blank input is InvalidInput; an unknown place is RouteUnavailable.
    """
    if isinstance(loc, Coordinate):
        return loc
    if loc is None or not str(loc).strip():
        raise InvalidInput(f"{field} is required", {"field": field})
    text = str(loc).strip()

    coord = parse_latlng(text)
    if coord is not None:
        return coord

    hit = lookup(text) or geocode(text)
    if hit is None:
        raise RouteUnavailable(f"could not resolve {field}: {text}", {"field": field, "query": text})
    lat, lng, label = hit
    logging.info(f"[geocoding] {text!r} → {label} ({lat:.4f},{lng:.4f})")
    return Coordinate(latitude=lat, longitude=lng)
