# services/report_store.py
import time, logging
from typing import Dict, List, Optional, Protocol, Tuple

import requests
from pydantic import BaseModel

from core.config import DEFAULT_TIMEOUT, REPORT_CACHE_TTL_SEC, REPORTS_API_URL
from core.errors import ReportStoreUnavailable
from core.http_client import http_get
from models.incidents import Coordinate, IncidentReport, IncidentType, ReportStatus, Severity
from parsers.reports_parser import parse_reports


class ReportFilter(BaseModel):
    type: Optional[IncidentType] = None
    severity: Optional[Severity] = None
    status: Optional[ReportStatus] = "Active"
    city: Optional[str] = None
    near: Optional[Coordinate] = None
    radius_km: float = 10
    limit: int = 500

    def to_params(self) -> Dict[str, str]:
        p = {"limit": str(self.limit)}
        for k in ("type", "severity", "status", "city"):
            v = getattr(self, k)
            if v:
                p[k] = v
        if self.near is not None:
            p["lat"] = str(self.near.latitude)
            p["lng"] = str(self.near.longitude)
            p["radius"] = str(self.radius_km)
        return p


class ReportStore(Protocol):
    """Source of incident reports; raises ReportStoreUnavailable."""

    def list_reports(self, filter: Optional[ReportFilter] = None) -> List[IncidentReport]: ...


def _now() -> float:
    return time.time()


class HttpReportStore:
    """
    Reads reports from the crowdsourcing API (GET /api/reports).
    Only current reports (Active, not deactivated, not expired) are returned.
    """

    def __init__(self, url: str = REPORTS_API_URL, timeout: float = DEFAULT_TIMEOUT,
                 cache_ttl_sec: float = REPORT_CACHE_TTL_SEC):
        self.url = url
        self.timeout = timeout
        self.cache_ttl_sec = cache_ttl_sec
        # same query within the TTL is not fetched again
        self._cache: Dict[Tuple, Tuple[float, List[IncidentReport]]] = {}

    def _hit_cache(self, key: Tuple) -> Optional[List[IncidentReport]]:
        rec = self._cache.get(key)
        if not rec:
            return None
        ts, data = rec
        if _now() - ts <= self.cache_ttl_sec:
            return data
        return None

    def _set_cache(self, key: Tuple, data: List[IncidentReport]) -> None:
        self._cache[key] = (_now(), data)

    def list_reports(self, filter: Optional[ReportFilter] = None) -> List[IncidentReport]:
        params = (filter or ReportFilter()).to_params()
        key = tuple(sorted(params.items()))
        hit = self._hit_cache(key)
        if hit is not None:
            return hit

        try:
            r = http_get(self.url, params=params, timeout=self.timeout)
            r.raise_for_status()
            payload = r.json()
        except (requests.RequestException, ValueError) as e:
            logging.error(f"[report_store] {type(e).__name__}: {e}")
            raise ReportStoreUnavailable(f"report store failed: {e}") from e

        data = [rep for rep in parse_reports(payload) if rep.is_current()]
        logging.info(f"[report_store] {len(data)} current reports")
        self._set_cache(key, data)
        return data


_default: Optional[HttpReportStore] = None

def get_report_store() -> HttpReportStore:
    global _default
    if _default is None:
        _default = HttpReportStore()
    return _default
