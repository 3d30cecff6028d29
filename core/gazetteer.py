# core/gazetteer.py
import os, logging, yaml
from typing import Dict, Any, Optional, Tuple

from core.config import GAZETTEER_PATH
from core.textnorm import normalize_place

# Built-in entries; the YAML file adds to or overrides them.
COMMON_LOCATIONS: Dict[str, Dict[str, Any]] = {
    "delhi":     {"lat": 28.7041, "lng": 77.1025, "name": "Delhi"},
    "noida":     {"lat": 28.5355, "lng": 77.3910, "name": "Noida"},
    "gurgaon":   {"lat": 28.4595, "lng": 77.0266, "name": "Gurgaon"},
    "ghaziabad": {"lat": 28.6692, "lng": 77.4538, "name": "Ghaziabad"},
    "faridabad": {"lat": 28.4089, "lng": 77.3178, "name": "Faridabad"},
    "mumbai":    {"lat": 19.0760, "lng": 72.8777, "name": "Mumbai"},
    "bangalore": {"lat": 12.9716, "lng": 77.5946, "name": "Bangalore"},
    "chennai":   {"lat": 13.0827, "lng": 80.2707, "name": "Chennai"},
    "kolkata":   {"lat": 22.5726, "lng": 88.3639, "name": "Kolkata"},
    "hyderabad": {"lat": 17.3850, "lng": 78.4867, "name": "Hyderabad"},
}

# inputs shorter than this only match exactly
MIN_PARTIAL_LEN = 3

_state = {"path": GAZETTEER_PATH, "ts": 0.0, "data": {}}

def _load_file(path: str) -> Dict[str, Dict[str, Any]]:
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    out: Dict[str, Dict[str, Any]] = {}
    for key, entry in (raw.get("locations") or {}).items():
        if not isinstance(entry, dict) or "lat" not in entry or "lng" not in entry:
            logging.warning(f"[gazetteer] skipping malformed entry: {key}")
            continue
        entry.setdefault("name", str(key))
        out[normalize_place(str(key))] = entry
        for alias in entry.get("aliases") or []:
            out[normalize_place(str(alias))] = entry
    return out

def set_path(path: str) -> None:
    _state["path"] = path
    _state["ts"] = 0.0

def load(force: bool = False) -> Dict[str, Dict[str, Any]]:
    """Read the place table (reloaded when the file changes)."""
    path = _state["path"]
    ts = os.path.getmtime(path) if os.path.exists(path) else 0.0
    if force or (ts != _state["ts"]) or not _state["data"]:
        _state["data"] = {**COMMON_LOCATIONS, **_load_file(path)}
        _state["ts"] = ts
    return _state["data"]

def lookup(place: str) -> Optional[Tuple[float, float, str]]:
    """Exact match first, then partial match in either direction."""
    name = normalize_place(place)
    if not name:
        return None
    table = load()
    hit = table.get(name)
    if hit is None and len(name) >= MIN_PARTIAL_LEN:
        for key, entry in table.items():
            if len(key) < MIN_PARTIAL_LEN:
                continue
            if key in name or name in key:
                hit = entry
                break
    if hit is None:
        return None
    return float(hit["lat"]), float(hit["lng"]), hit.get("name", place)
