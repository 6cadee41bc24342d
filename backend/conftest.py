"""Shared fixtures: provider route builders and an in-memory Google Maps stand-in"""

from typing import Dict, List, Optional, Sequence

import polyline
import pytest

from config import Settings
from models import CandidateRoute, Coordinate, ElevationProfile
from services.errors import ElevationUnavailable, ProviderFailure
from services.geometry import Point
from services.maps_client import ProviderLeg, ProviderRoute, ProviderStep
from services.report_store import report_store

# Student Services Building -> Zachry Engineering
CAMPUS_START = Coordinate(lat=30.6150, lng=-96.3400)
CAMPUS_END = Coordinate(lat=30.6200, lng=-96.3350)


def make_route(points: Sequence[Point], maneuvers: Sequence[str] = (), distance_m: float = 1000,
               duration_s: float = 720, legs: int = 1) -> ProviderRoute:
    """Provider route split evenly over `legs` legs; maneuvers go on the first leg"""
    provider_legs = []
    for i in range(legs):
        steps = [ProviderStep(maneuver=m) for m in maneuvers] if i == 0 else [ProviderStep()]
        provider_legs.append(ProviderLeg(distance_m=distance_m / legs, duration_s=duration_s / legs, steps=steps))
    return ProviderRoute(legs=provider_legs, overview_polyline=polyline.encode(points))


def make_candidate(index: int = 0, *, skate_time: float = 10.0, num_turns: int = 2, roughness: float = 2.0,
                   smoothness_score: float = 5.0, blocked: bool = False, distance: float = 2.0) -> CandidateRoute:
    return CandidateRoute(
        index=index,
        type="regular" if index >= 0 else "waypoint",
        description=f"Route {index}",
        distance=distance,
        walking_time=distance / 5 * 60,
        base_skate_time=skate_time,
        skate_time=skate_time,
        congestion_multiplier=1.0,
        has_congestion=False,
        num_turns=num_turns,
        roughness=roughness,
        smoothness_score=smoothness_score,
        blocked=blocked,
        polyline="",
        elevation=ElevationProfile.unavailable(),
        calories=0,
    )


class FakeMapsClient:
    """Answers directions, geocoding and elevation from in-memory tables"""

    def __init__(self, routes: Optional[List[ProviderRoute]] = None,
                 waypoint_routes: Optional[Dict[str, ProviderRoute]] = None,
                 locations: Optional[Dict[str, Coordinate]] = None,
                 elevation: float = 100.0, elevations: Optional[Dict[Point, float]] = None,
                 directions_status: str = "OK", elevation_fails: bool = False):
        self.routes = routes or []
        self.waypoint_routes = waypoint_routes or {}
        self.locations = locations or {}
        self.default_elevation = elevation
        self.elevations = elevations or {}
        self.directions_status = directions_status
        self.elevation_fails = elevation_fails
        self.directions_calls = []

    async def directions(self, origin, destination, waypoint=None, alternatives=False):
        self.directions_calls.append({"origin": origin, "destination": destination,
                                      "waypoint": waypoint, "alternatives": alternatives})
        if waypoint is not None:
            if waypoint not in self.waypoint_routes:
                raise ProviderFailure("Directions API error: ZERO_RESULTS")
            return [self.waypoint_routes[waypoint]]
        if self.directions_status != "OK":
            raise ProviderFailure(f"Directions API error: {self.directions_status}")
        return list(self.routes)

    async def geocode(self, address):
        if address not in self.locations:
            raise ProviderFailure(f"Could not geocode address: {address}")
        return self.locations[address]

    async def elevation(self, lat, lng):
        if self.elevation_fails:
            raise ElevationUnavailable("Elevation API error: UNKNOWN_ERROR")
        return self.elevations.get((lat, lng), self.default_elevation)


@pytest.fixture
def settings():
    test_settings = Settings()
    test_settings.provider_timeout_seconds = 2.0
    test_settings.max_waypoint_requests = 6
    test_settings.roughness_seed = 7
    return test_settings


@pytest.fixture(autouse=True)
def empty_report_store():
    report_store.clear()
    yield report_store
    report_store.clear()
