# core/geomath.py
# Pure distance primitives. No state, no I/O.
import math

from models.incidents import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in kilometres."""
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude))
        * math.cos(math.radians(b.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def closest_point_on_segment(point: Coordinate, seg_start: Coordinate,
                             seg_end: Coordinate) -> Coordinate:
    """
    Project ``point`` onto ``[seg_start, seg_end]`` and return the nearest
    point of the segment.

    The projection runs in a local equirectangular frame: longitudes are
    scaled by cos(mean latitude) of the segment so that east-west and
    north-south degrees weigh the same before the dot product. This keeps
    the closest point within a few percent of the true one for segments
    under ~20 km up to high latitudes.
    """
    k = math.cos(math.radians((seg_start.latitude + seg_end.latitude) / 2))
    dx = (seg_end.longitude - seg_start.longitude) * k
    dy = seg_end.latitude - seg_start.latitude
    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        return seg_start
    px = (point.longitude - seg_start.longitude) * k
    py = point.latitude - seg_start.latitude
    t = max(0.0, min(1.0, (px * dx + py * dy) / len_sq))
    return Coordinate(
        latitude=seg_start.latitude + t * (seg_end.latitude - seg_start.latitude),
        longitude=seg_start.longitude + t * (seg_end.longitude - seg_start.longitude),
    )


def point_to_segment_distance_km(point: Coordinate, seg_start: Coordinate,
                                 seg_end: Coordinate) -> float:
    """Shortest distance (km) from ``point`` to the segment, measured by haversine."""
    if seg_start == seg_end:
        return haversine_distance_km(point, seg_start)
    closest = closest_point_on_segment(point, seg_start, seg_end)
    return haversine_distance_km(point, closest)


def format_distance(km: float) -> str:
    """Display form: metres under 1 km, one decimal under 10 km, whole km above."""
    if km < 1:
        return f"{round(km * 1000)}m"
    if km < 10:
        return f"{km:.1f}km"
    return f"{round(km)}km"
