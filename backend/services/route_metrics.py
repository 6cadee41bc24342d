"""
Per-route quality metrics for skateboard routing.

Pure functions over a parsed provider route and the reports matched to it:
turn count, roughness, crowd-sourced smoothness, congestion, blocking,
elevation difficulty, skate time and calorie estimate.
"""

import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from models import ElevationProfile, Report
from services.geometry import Point, decode_polyline
from services.maps_client import ProviderRoute
from services.report_matcher import match_reports

SKATEBOARD_SPEED_KMH = 15

DEFAULT_SMOOTHNESS = 5.0

TURN_PATTERN = re.compile(r"turn-left|turn-right")
SLIGHT_PATTERN = re.compile(r"slight")
JUNCTION_PATTERN = re.compile(r"roundabout|fork")

BLOCKING_REPORT_TYPES = {"construction", "blocked"}

# (upper bound on |difference| in meters, difficulty, display color)
ELEVATION_DIFFICULTY_BUCKETS = [
    (3, "flat", "#2196F3"),
    (8, "easy", "#4CAF50"),
    (15, "moderate", "#FF9800"),
    (25, "hard", "#FF5722"),
]
STEEPEST_DIFFICULTY = ("very hard", "#F44336")

# Differences within this many meters count as flat
DIRECTION_THRESHOLD_M = 1


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves toward +infinity (round() would round them to even)"""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def count_turns(route: ProviderRoute) -> int:
    """Hard turns plus roundabouts and forks across all legs"""
    turns = 0
    for leg in route.legs:
        for step in leg.steps:
            maneuver = step.maneuver or ""
            if TURN_PATTERN.search(maneuver) and not SLIGHT_PATTERN.search(maneuver):
                turns += 1
            if JUNCTION_PATTERN.search(maneuver):
                turns += 1
    return turns


def smoothness_score(matched: Iterable[Report]) -> float:
    """Mean smoothness rating of matched reports, 5.0 (best) when there are none"""
    ratings = [r.rating for r in matched if r.type == "smoothness" and r.rating]
    if not ratings:
        return DEFAULT_SMOOTHNESS
    return sum(ratings) / len(ratings)


def roughness(total_steps: int, smoothness: float, jitter: float) -> float:
    """
    Roughness estimate: a step-count term scaled by a jitter in [0, 1) plus a
    penalty for poor crowd-sourced smoothness.
    """
    return total_steps * jitter * 0.5 + (5 - smoothness) * 2


def is_blocked(matched: Iterable[Report]) -> bool:
    return any(r.type in BLOCKING_REPORT_TYPES for r in matched)


def congestion_multiplier(matched: Iterable[Report]) -> float:
    """
    Skate time multiplier from matched congestion reports.

    Level 1 (empty) is 1.0x, level 5 (packed) is 2.0x, linear in between.
    """
    levels = [r.congestion for r in matched if r.type == "congestion" and r.congestion]
    if not levels:
        return 1.0
    avg = sum(levels) / len(levels)
    return 1 + (avg - 1) * 0.25


def skate_time(distance_km: float) -> float:
    """Unadjusted skate time in minutes"""
    return (distance_km / SKATEBOARD_SPEED_KMH) * 60


def classify_elevation(start_elevation: float, end_elevation: float) -> ElevationProfile:
    difference = end_elevation - start_elevation
    abs_difference = abs(difference)

    direction = "flat"
    if difference > DIRECTION_THRESHOLD_M:
        direction = "uphill"
    elif difference < -DIRECTION_THRESHOLD_M:
        direction = "downhill"

    difficulty, color = STEEPEST_DIFFICULTY
    for upper, name, bucket_color in ELEVATION_DIFFICULTY_BUCKETS:
        if abs_difference < upper:
            difficulty, color = name, bucket_color
            break

    return ElevationProfile(
        difference=round_half_up(difference, 1),
        abs_difference=round_half_up(abs_difference, 1),
        direction=direction,
        difficulty=difficulty,
        difficulty_color=color,
        start_elevation=round_half_up(start_elevation, 1),
        end_elevation=round_half_up(end_elevation, 1),
        available=True,
    )


def calories(distance_km: float, skate_minutes: float, elevation: Optional[ElevationProfile]) -> int:
    """
    Calorie estimate: average of a time-based (6 cal/min) and a
    distance-based (45 cal/km) burn, plus 10 cal per meter climbed or
    2 cal per meter descended.
    """
    base_calories = skate_minutes * 6
    distance_calories = distance_km * 45

    elevation_calories = 0.0
    if elevation is not None:
        if elevation.difference > 0:
            elevation_calories = elevation.difference * 10
        elif elevation.difference < 0:
            elevation_calories = abs(elevation.difference) * 2

    return int(round_half_up((base_calories + distance_calories) / 2 + elevation_calories))


@dataclass(frozen=True)
class RouteMetrics:
    points: List[Point]
    matched_reports: List[Report]
    distance_km: float
    walking_time: float
    num_turns: int
    smoothness_score: float
    roughness: float
    blocked: bool
    congestion_multiplier: float
    base_skate_time: float
    skate_time: float

    @property
    def has_congestion(self) -> bool:
        return self.congestion_multiplier > 1.0

    @property
    def endpoints(self) -> Optional[Sequence[Point]]:
        if not self.points:
            return None
        return self.points[0], self.points[-1]


def compute_route_metrics(route: ProviderRoute, reports: Iterable[Report], jitter: float) -> RouteMetrics:
    """Every metric except elevation, from one decode of the route polyline"""
    points = decode_polyline(route.overview_polyline)
    matched = match_reports(points, reports)

    smoothness = smoothness_score(matched)
    multiplier = congestion_multiplier(matched)
    distance_km = route.distance_km
    base_skate = skate_time(distance_km)

    return RouteMetrics(
        points=points,
        matched_reports=matched,
        distance_km=distance_km,
        walking_time=route.duration_minutes,
        num_turns=count_turns(route),
        smoothness_score=smoothness,
        roughness=roughness(route.total_steps, smoothness, jitter),
        blocked=is_blocked(matched),
        congestion_multiplier=multiplier,
        base_skate_time=base_skate,
        skate_time=base_skate * multiplier,
    )
