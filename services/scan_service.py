# services/scan_service.py
import asyncio, logging, time
from typing import Any, Dict, List, Optional, Union

from core.config import MATCH_WORKERS, ROUTE_TOLERANCE_KM, SCAN_TIMEOUT_SEC
from core.errors import InvalidInput, ReportStoreUnavailable, RouteUnavailable, ScanError, ScanTimeout
from core.geocoding import coerce_location
from core.geomath import format_distance
from models.incidents import Coordinate, IncidentReport
from models.route_scan import AlternativeRoute, MatchedReport, Route, RouteAssessment, ScanResult
from services.alt_routes_service import generate_alternatives, summarize_alternatives
from services.directions_service import Directions
from services.report_store import ReportFilter, ReportStore
from services.route_classifier import classify
from services.route_matcher import match_reports

Location = Union[str, Coordinate, Dict[str, Any], None]

def _fmt(m: MatchedReport) -> str:
    where = f" · {m.address}" if m.address else ""
    return f"• {m.type} ({m.severity}){where} · {format_distance(m.distance_from_start_km)} from start"

def summarize_scan(assessment: RouteAssessment, route: Route,
                   matched: List[MatchedReport], alts: List[AlternativeRoute]) -> str:
    head = (f"{assessment.status} · rating {assessment.rating}/5 · "
            f"est. {assessment.estimated_time_min:.0f} mins over {format_distance(route.distance_km)}")
    lines = [head, f"{len(matched)} incidents on route"]
    lines += [_fmt(m) for m in matched]
    lines += summarize_alternatives(alts)
    return "\n".join(lines)


class ScanOrchestrator:
    """
    Path scan façade: resolve route and reports (concurrently), match,
    classify, suggest alternatives. Holds no per-scan state.
    """

    def __init__(self, directions: Directions, report_store: ReportStore,
                 tolerance_km: float = ROUTE_TOLERANCE_KM,
                 timeout_sec: float = SCAN_TIMEOUT_SEC,
                 match_workers: int = MATCH_WORKERS):
        self.directions = directions
        self.report_store = report_store
        self.tolerance_km = tolerance_km
        self.timeout_sec = timeout_sec
        self.match_workers = match_workers

    def _fetch_route(self, start: Location, end: Location) -> Route:
        try:
            return self.directions.get_route(start, end)
        except ScanError:
            raise
        except Exception as e:
            raise RouteUnavailable(f"directions failed: {type(e).__name__}: {e}") from e

    def _fetch_reports(self) -> List[IncidentReport]:
        try:
            return list(self.report_store.list_reports(ReportFilter()))
        except ScanError:
            raise
        except Exception as e:
            raise ReportStoreUnavailable(f"report store failed: {type(e).__name__}: {e}") from e

    async def scan(self, start: Location, end: Location,
                   tolerance_km: Optional[float] = None,
                   timeout_sec: Optional[float] = None) -> ScanResult:
        start = coerce_location(start, "start")
        end = coerce_location(end, "end")
        tol = self.tolerance_km if tolerance_km is None else tolerance_km
        timeout = self.timeout_sec if timeout_sec is None else timeout_sec
        # zero keeps only reports lying exactly on the route
        if tol < 0:
            raise InvalidInput("toleranceKm must not be negative", {"toleranceKm": tol})
        if timeout <= 0:
            raise InvalidInput("timeoutSec must be positive", {"timeoutSec": timeout})

        t0 = time.monotonic()
        loop = asyncio.get_running_loop()
        route_f = loop.run_in_executor(None, self._fetch_route, start, end)
        reports_f = loop.run_in_executor(None, self._fetch_reports)
        try:
            route, reports = await asyncio.wait_for(asyncio.gather(route_f, reports_f), timeout=timeout)
        except asyncio.TimeoutError:
            # worker threads finish on their own; their results are dropped
            logging.warning(f"[route_scan] collaborators did not answer within {timeout}s")
            raise ScanTimeout(f"scan timed out after {timeout}s", {"timeoutSec": timeout})
        except ScanError as e:
            logging.error(f"[route_scan] {e.code}: {e.message}")
            raise

        matched = match_reports(route, reports, tol, workers=self.match_workers)
        assessment = classify(route, matched)
        alts = generate_alternatives(route, matched)

        logging.info(f"[route_scan] {assessment.status} rating={assessment.rating} "
                     f"matched={len(matched)}/{len(reports)} "
                     f"elapsed={time.monotonic() - t0:.2f}s")
        return ScanResult(
            status=assessment.status,
            rating=assessment.rating,
            estimated_time_min=assessment.estimated_time_min,
            route_distance_km=route.distance_km,
            route_duration_min=route.duration_min,
            matched_reports=matched,
            alternatives=alts,
            summary=summarize_scan(assessment, route, matched, alts),
        )
