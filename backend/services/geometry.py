"""
Geometry helpers shared by report matching and route scoring.

All points are (lat, lng) tuples in decimal degrees. Distances are in
kilometers.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

import polyline

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

EARTH_RADIUS_KM = 6371.0

# Reports closer than this to any route segment count as "on" the route
NEAR_ROUTE_THRESHOLD_KM = 0.05


def decode_polyline(encoded: Optional[str]) -> List[Point]:
    """
    Decode a Google-encoded polyline string into a list of (lat, lng) points.

    Returns an empty list for a missing, empty or truncated string.
    """
    if not encoded:
        return []
    try:
        return [(lat, lng) for lat, lng in polyline.decode(encoded)]
    except (IndexError, ValueError) as e:
        logger.warning(f"Could not decode route polyline: {e}")
        return []


def great_circle_distance(p1: Point, p2: Point) -> float:
    """Haversine distance between two points in kilometers"""
    lat1, lng1 = p1
    lat2, lng2 = p2

    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    a = (math.sin(d_lat / 2) ** 2 +
         math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def point_to_segment_distance(point: Point, seg_start: Point, seg_end: Point) -> float:
    """
    Distance in kilometers from a point to a segment.

    The projection parameter is computed treating lat/lng as planar and is
    clamped to the segment; the distance to the projected point is then
    measured on the sphere.
    """
    px, py = point
    x1, y1 = seg_start
    x2, y2 = seg_end

    dx = x2 - x1
    dy = y2 - y1
    length_sq = dx * dx + dy * dy

    # Zero-length segment degenerates to its start point
    param = -1.0
    if length_sq != 0:
        param = ((px - x1) * dx + (py - y1) * dy) / length_sq

    if param < 0:
        nearest = (x1, y1)
    elif param > 1:
        nearest = (x2, y2)
    else:
        nearest = (x1 + param * dx, y1 + param * dy)

    return great_circle_distance(point, nearest)


def is_point_near_polyline(point: Point, polyline_points: Sequence[Point],
                           threshold_km: float = NEAR_ROUTE_THRESHOLD_KM) -> bool:
    """True if any consecutive segment of the polyline is closer than the threshold"""
    for i in range(len(polyline_points) - 1):
        if point_to_segment_distance(point, polyline_points[i], polyline_points[i + 1]) < threshold_km:
            return True
    return False
