"""Report-to-route matching."""

import pytest

from conftest import CP, MUMBAI, NORTH_DELHI, coord
from models.route_scan import Route
from services.route_matcher import distance_to_route_km, match_reports


def test_report_on_first_waypoint_has_zero_distance(delhi_route, make_report):
    rep = make_report(*CP, severity="high")
    matched = match_reports(delhi_route, [rep])
    assert len(matched) == 1
    assert matched[0].distance_from_route_km == 0
    assert matched[0].distance_from_start_km == 0
    assert matched[0].id == rep.id


def test_far_reports_are_not_matched(delhi_route, make_report):
    assert match_reports(delhi_route, [make_report(*MUMBAI), make_report(28.40, 77.50)]) == []


def test_single_waypoint_route_matches_nothing(make_report):
    route = Route(waypoints=[coord(*CP)], distance_km=0, duration_min=0)
    assert match_reports(route, [make_report(*CP)]) == []


def test_empty_route_matches_nothing(make_report):
    route = Route(waypoints=[], distance_km=0, duration_min=0)
    assert match_reports(route, [make_report(*CP)]) == []
    assert distance_to_route_km(coord(*CP), []) is None


def test_tolerance_boundary_is_inclusive(delhi_route, make_report):
    rep = make_report(28.6139, 77.2500)
    d = distance_to_route_km(rep.location, delhi_route.waypoints)
    assert d > 1
    assert [m.id for m in match_reports(delhi_route, [rep], tolerance_km=d)] == [rep.id]
    # one km beyond the tolerance
    assert match_reports(delhi_route, [rep], tolerance_km=d - 1) == []


def test_default_tolerance_is_one_and_a_half_km(make_report):
    route = Route(waypoints=[coord(0, 0), coord(0, 1)], distance_km=111, duration_min=90)
    near = make_report(0.0125, 0.5)    # ~1.39 km north of the segment
    far = make_report(0.0145, 0.5)     # ~1.61 km north of the segment
    assert [m.id for m in match_reports(route, [near, far])] == [near.id]


def test_minimum_over_all_segments(make_report):
    route = Route(waypoints=[coord(0, 0), coord(0, 1), coord(1, 1)],
                  distance_km=222, duration_min=180)
    rep = make_report(0.5, 1.005)      # next to the second leg only
    matched = match_reports(route, [rep])
    assert len(matched) == 1
    assert matched[0].distance_from_route_km == pytest.approx(0.556, abs=0.01)
    assert matched[0].distance_from_start_km > 100


def test_results_sorted_by_distance_from_start(delhi_route, make_report):
    far_along = make_report(28.69, 77.12, id="b")
    near_start = make_report(28.62, 77.20, id="a")
    matched = match_reports(delhi_route, [far_along, near_start])
    assert [m.id for m in matched] == ["a", "b"]
    assert matched[0].distance_from_start_km < matched[1].distance_from_start_km


def test_matching_is_idempotent(delhi_route, make_report):
    reports = [make_report(*CP), make_report(28.66, 77.15, severity="low"), make_report(*MUMBAI)]
    first = {m.id for m in match_reports(delhi_route, reports)}
    second = {m.id for m in match_reports(delhi_route, reports)}
    assert first == second


def test_parallel_matching_matches_sequential(delhi_route, make_report):
    reports = [make_report(28.6139 + i * 0.005, 77.2090 - i * 0.006) for i in range(20)]
    reports += [make_report(*MUMBAI) for _ in range(5)]
    seq = match_reports(delhi_route, reports, workers=1)
    par = match_reports(delhi_route, reports, workers=4)
    assert {m.id for m in seq} == {m.id for m in par}
    assert [m.id for m in seq] == [m.id for m in par]


def test_matched_report_keeps_source_fields(delhi_route, make_report):
    rep = make_report(*NORTH_DELHI, severity="medium", type="construction",
                      address="Ring Road Junction")
    m = match_reports(delhi_route, [rep])[0]
    assert (m.type, m.severity, m.address) == ("construction", "medium", "Ring Road Junction")
    assert m.distance_from_start_km == pytest.approx(14.44, abs=0.1)
