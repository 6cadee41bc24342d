"""
Waypoint generation for diversifying candidate routes.

The provider tends to return near-identical alternatives on a campus grid.
Routing through a few synthetic waypoints surfaces paths it would not offer:

- Right-angle waypoints: corner points built from the start/end deltas plus
  major campus intersections lying on a roughly 45 degree diagonal from the
  start or the end
- Diagonal waypoints: points interpolated along the direct path
"""

import logging
from typing import List

from models import Coordinate, Waypoint

logger = logging.getLogger(__name__)

# Major Texas A&M campus intersections
CAMPUS_INTERSECTIONS = [
    {"lat": 30.6200, "lng": -96.3400, "name": "Joe Routt & Lamar"},
    {"lat": 30.6180, "lng": -96.3380, "name": "University & Lamar"},
    {"lat": 30.6150, "lng": -96.3420, "name": "Houston & Lamar"},
    {"lat": 30.6170, "lng": -96.3360, "name": "University & Ross"},
    {"lat": 30.6190, "lng": -96.3440, "name": "Spence & Lamar"},
    {"lat": 30.6210, "lng": -96.3390, "name": "Joe Routt & Lubbock"},
]

# |dlat/dlng| window treated as lying on the diagonal grid
DIAGONAL_RATIO_MIN = 0.8
DIAGONAL_RATIO_MAX = 1.2

MAX_RIGHT_ANGLE_WAYPOINTS = 3
DIAGONAL_RATIOS = [0.33, 0.5, 0.67]


def _slope_ratio(d_lat: float, d_lng: float) -> float:
    if d_lng == 0:
        return float("inf")
    return abs(d_lat / d_lng)


def _on_diagonal(ratio: float) -> bool:
    return DIAGONAL_RATIO_MIN < ratio < DIAGONAL_RATIO_MAX


def right_angle_waypoints(start: Coordinate, end: Coordinate) -> List[Waypoint]:
    """Corner waypoints followed by diagonally aligned intersections, at most 3"""
    d_lat = end.lat - start.lat
    d_lng = end.lng - start.lng

    waypoints = [
        Waypoint(
            lat=start.lat + d_lat,
            lng=start.lng + d_lat,
            description="Via diagonal (45°) then perpendicular (135°)",
        ),
        Waypoint(
            lat=start.lat - d_lng,
            lng=start.lng + d_lng,
            description="Via diagonal (135°) then perpendicular (45°)",
        ),
    ]

    for intersection in CAMPUS_INTERSECTIONS:
        ratio_from_start = _slope_ratio(intersection["lat"] - start.lat, intersection["lng"] - start.lng)
        ratio_to_end = _slope_ratio(end.lat - intersection["lat"], end.lng - intersection["lng"])

        if _on_diagonal(ratio_from_start) or _on_diagonal(ratio_to_end):
            waypoints.append(Waypoint(
                lat=intersection["lat"],
                lng=intersection["lng"],
                description=f"Via {intersection['name']} (diagonal grid)",
            ))

    return waypoints[:MAX_RIGHT_ANGLE_WAYPOINTS]


def diagonal_waypoints(start: Coordinate, end: Coordinate) -> List[Waypoint]:
    """Points at 33%, 50% and 67% of the straight line from start to end"""
    return [
        Waypoint(
            lat=start.lat + (end.lat - start.lat) * ratio,
            lng=start.lng + (end.lng - start.lng) * ratio,
            description=f"{ratio * 100:.0f}% along direct path",
        )
        for ratio in DIAGONAL_RATIOS
    ]


def generate_waypoints(start: Coordinate, end: Coordinate) -> List[Waypoint]:
    waypoints = right_angle_waypoints(start, end) + diagonal_waypoints(start, end)
    logger.debug(f"Generated {len(waypoints)} waypoint configurations")
    return waypoints
