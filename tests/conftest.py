"""Shared fixtures: deterministic routes, reports and in-process collaborators."""

import time
from datetime import datetime, timezone
from typing import Callable, List, Optional

import pytest

from core.errors import ReportStoreUnavailable, RouteUnavailable
from models.incidents import Coordinate, IncidentReport
from models.route_scan import MatchedReport, Route


CP = (28.6139, 77.2090)       # Connaught Place area
NORTH_DELHI = (28.7041, 77.1025)
MUMBAI = (19.0760, 72.8777)

REPORTED_AT = datetime(2026, 1, 1, 8, 30, tzinfo=timezone.utc)


def coord(lat: float, lng: float) -> Coordinate:
    return Coordinate(latitude=lat, longitude=lng)


class FakeDirections:
    """Returns a fixed route, or raises the given exception."""

    def __init__(self, route: Optional[Route] = None, error: Optional[Exception] = None,
                 delay: float = 0.0):
        self.route = route
        self.error = error
        self.delay = delay
        self.calls = 0

    def get_route(self, start, end) -> Route:
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.route


class FakeReportStore:
    def __init__(self, reports: Optional[List[IncidentReport]] = None,
                 error: Optional[Exception] = None):
        self.reports = reports or []
        self.error = error
        self.calls = 0

    def list_reports(self, filter=None) -> List[IncidentReport]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.reports)


@pytest.fixture
def delhi_route() -> Route:
    return Route(waypoints=[coord(*CP), coord(*NORTH_DELHI)],
                 distance_km=14.6, duration_min=30)


@pytest.fixture
def make_report() -> Callable[..., IncidentReport]:
    counter = {"n": 0}

    def _make(lat: float, lng: float, severity: str = "high",
              type: str = "accident", **kw) -> IncidentReport:
        counter["n"] += 1
        return IncidentReport(
            id=kw.pop("id", f"r{counter['n']}"),
            type=type,
            severity=severity,
            location=coord(lat, lng),
            reported_at=REPORTED_AT,
            **kw,
        )
    return _make


@pytest.fixture
def make_matched(make_report) -> Callable[..., MatchedReport]:
    def _make(severity: str, distance_from_start_km: float = 1.0) -> MatchedReport:
        rep = make_report(*CP, severity=severity)
        return MatchedReport(**rep.model_dump(), distance_from_route_km=0.0,
                             distance_from_start_km=distance_from_start_km)
    return _make


@pytest.fixture
def route_down() -> FakeDirections:
    return FakeDirections(error=RouteUnavailable("no route"))


@pytest.fixture
def store_down() -> FakeReportStore:
    return FakeReportStore(error=ReportStoreUnavailable("store offline"))
