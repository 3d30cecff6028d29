# services/alt_routes_service.py
"""
Alternative-route suggestions.

These are advisory heuristics, not routing results: each suggestion applies
a fixed time/distance delta to the unpenalised base route. Consumers must
present them as estimates.
"""
from typing import List, Sequence

from models.route_scan import AlternativeRoute, MatchedReport, Route
from services.route_classifier import severity_counts

# name, description, time delta (min), distance delta (km), reason
OUTER_RING = ("Outer Ring Road", "Wider loop around the city core", 8, 3,
              "avoids detected incidents")
TRANSIT = ("Metro Route", "Public transit for the same trip", 12, 2,
           "no traffic incidents")
INNER_CIRCLE = ("Inner Circle", "Direct route through the centre", -3, -1,
                "minimal incidents detected")
EXPRESSWAY = ("Expressway", "Limited-access highway", -5, 1,
              "clear route with minimal traffic")

def _alt(route: Route, rule) -> AlternativeRoute:
    name, desc, dt, dd, reason = rule
    return AlternativeRoute(
        name=name,
        description=desc,
        total_time_min=route.duration_min + dt,
        time_delta_min=dt,
        distance_delta_km=dd,
        reason=reason,
    )

def generate_alternatives(route: Route, matched: Sequence[MatchedReport]) -> List[AlternativeRoute]:
    """Each rule is applied independently; list order is presentation order."""
    high, _ = severity_counts(matched)
    out: List[AlternativeRoute] = []
    if matched:
        out.append(_alt(route, OUTER_RING))
    # transit is modelled as unaffected by road incidents
    out.append(_alt(route, TRANSIT))
    if high == 0:
        out.append(_alt(route, INNER_CIRCLE))
        out.append(_alt(route, EXPRESSWAY))
    return out

def summarize_alternatives(alts: Sequence[AlternativeRoute]) -> List[str]:
    lines = []
    for a in alts:
        sign = "+" if a.time_delta_min >= 0 else "-"
        lines.append(f"Via {a.name} ({sign}{abs(a.time_delta_min):g} mins)")
    return lines
