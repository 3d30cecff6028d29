# services/route_matcher.py
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from core.config import MATCH_WORKERS, ROUTE_TOLERANCE_KM
from core.geomath import haversine_distance_km, point_to_segment_distance_km
from models.incidents import Coordinate, IncidentReport
from models.route_scan import MatchedReport, Route

def distance_to_route_km(point: Coordinate, waypoints: Sequence[Coordinate]) -> Optional[float]:
    """Minimum distance from point to any consecutive waypoint pair; None for < 2 waypoints."""
    if len(waypoints) < 2:
        return None
    return min(point_to_segment_distance_km(point, a, b)
               for a, b in zip(waypoints, waypoints[1:]))

def _match_chunk(waypoints: Sequence[Coordinate], reports: Sequence[IncidentReport],
                 tolerance_km: float) -> List[MatchedReport]:
    out: List[MatchedReport] = []
    start = waypoints[0]
    for rep in reports:
        d = distance_to_route_km(rep.location, waypoints)
        if d is None or d > tolerance_km:
            continue
        out.append(MatchedReport(
            **rep.model_dump(),
            distance_from_route_km=d,
            distance_from_start_km=haversine_distance_km(start, rep.location),
        ))
    return out

def match_reports(route: Route, reports: Sequence[IncidentReport],
                  tolerance_km: float = ROUTE_TOLERANCE_KM,
                  workers: int = MATCH_WORKERS) -> List[MatchedReport]:
    """
    Reports whose minimum segment distance is within tolerance_km (inclusive).

    A route with fewer than two waypoints is degenerate and matches nothing.
    With workers > 1 the report list is split across a thread pool; each report
    is independent so no locking is involved. Results are always ordered by
    distance from the route start (then id).
    """
    waypoints = route.waypoints
    reports = list(reports)
    if len(waypoints) < 2 or not reports:
        return []

    if workers <= 1 or len(reports) < workers:
        matched = _match_chunk(waypoints, reports, tolerance_km)
    else:
        size = -(-len(reports) // workers)
        chunks = [reports[i:i + size] for i in range(0, len(reports), size)]
        matched = []
        with ThreadPoolExecutor(max_workers=workers) as pool:
            for part in pool.map(lambda c: _match_chunk(waypoints, c, tolerance_km), chunks):
                matched.extend(part)

    matched.sort(key=lambda m: (m.distance_from_start_km, m.id))
    return matched
