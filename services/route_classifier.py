# services/route_classifier.py
from typing import Sequence

from models.route_scan import MatchedReport, Route, RouteAssessment

# Delay added per matched incident, in minutes. A high-severity report
# (accident, closure) typically means a lane is blocked; medium means slowdown.
HIGH_DELAY_MIN = 10
MEDIUM_DELAY_MIN = 5

# Rating floors: blocked routes can bottom out at 1, caution never below 2.
BLOCKED_MIN_RATING = 1
CAUTION_MIN_RATING = 2
MAX_RATING = 5

def severity_counts(matched: Sequence[MatchedReport]):
    high = sum(1 for m in matched if m.severity == "high")
    medium = sum(1 for m in matched if m.severity == "medium")
    return high, medium

def classify(route: Route, matched: Sequence[MatchedReport]) -> RouteAssessment:
    """First matching rule wins: any high → blocked, any medium → caution, else clear."""
    high, medium = severity_counts(matched)
    if high > 0:
        return RouteAssessment(
            status="blocked",
            rating=max(BLOCKED_MIN_RATING, MAX_RATING - high),
            estimated_time_min=route.duration_min + high * HIGH_DELAY_MIN,
            high_count=high, medium_count=medium,
        )
    if medium > 0:
        return RouteAssessment(
            status="caution",
            rating=max(CAUTION_MIN_RATING, MAX_RATING - medium),
            estimated_time_min=route.duration_min + medium * MEDIUM_DELAY_MIN,
            high_count=high, medium_count=medium,
        )
    return RouteAssessment(status="clear", rating=MAX_RATING,
                           estimated_time_min=route.duration_min,
                           high_count=0, medium_count=0)
