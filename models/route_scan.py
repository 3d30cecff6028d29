# models/route_scan.py
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field

from models.incidents import CamelModel, Coordinate, IncidentReport

RouteStatus = Literal["clear", "caution", "blocked"]


class Route(CamelModel):
    # fewer than 2 waypoints is a degenerate route: valid, matches nothing
    waypoints: List[Coordinate]
    distance_km: float = Field(ge=0)
    duration_min: float = Field(ge=0)


class MatchedReport(IncidentReport):
    distance_from_route_km: float = Field(ge=0)
    distance_from_start_km: float = Field(ge=0)


class AlternativeRoute(CamelModel):
    """Heuristic suggestion relative to the unpenalised base route.

    Not the output of a routing engine; the deltas are fixed advisory
    estimates and should be presented to users as such.
    """
    name: str
    description: str
    total_time_min: float
    time_delta_min: float
    distance_delta_km: float
    reason: str


class RouteAssessment(CamelModel):
    status: RouteStatus
    rating: int = Field(ge=1, le=5)
    estimated_time_min: float
    high_count: int = 0
    medium_count: int = 0


class ScanResult(CamelModel):
    status: RouteStatus
    rating: int = Field(ge=1, le=5)
    estimated_time_min: float
    route_distance_km: float
    route_duration_min: float
    matched_reports: List[MatchedReport] = []
    alternatives: List[AlternativeRoute] = []
    summary: str = ""


# coordinate objects are validated by the scan so a bad one is a 400, not a 422
LocationInput = Union[str, Dict[str, Any]]


class RouteScanRequest(CamelModel):
    start: Optional[LocationInput] = None
    end: Optional[LocationInput] = None
    tolerance_km: Optional[float] = None
    timeout_sec: Optional[float] = None
