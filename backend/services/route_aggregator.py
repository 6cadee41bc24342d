"""
Builds the candidate route set for one request.

Regular routes come from a single directions request with alternatives
enabled. Waypoint routes come from one single-waypoint directions request per
generated waypoint. Both sets are enriched with metrics and elevation, then
concatenated without deduplication.
"""

import asyncio
import logging
import random
from typing import Callable, List, Optional, Sequence

from config import Settings, get_settings
from models import CandidateRoute, Coordinate, ElevationProfile, Location, Report, Waypoint
from services.elevation import get_elevation_profile
from services.errors import ProviderFailure, WaypointRouteUnavailable
from services.maps_client import ProviderRoute
from services.route_metrics import calories, compute_route_metrics
from services.waypoints import generate_waypoints

logger = logging.getLogger(__name__)


def location_query(location: Location) -> str:
    """Provider query string for an address or a coordinate"""
    if isinstance(location, Coordinate):
        return location.as_query()
    if isinstance(location, (list, tuple)):
        return f"{location[0]},{location[1]}"
    return location


def make_jitter_source(seed: Optional[int]) -> Callable[[int], float]:
    """
    Roughness jitter per candidate index, in [0, 1).

    With a seed every candidate gets its own derived stream, so results do not
    depend on the order in which concurrent provider calls complete.
    """
    if seed is None:
        rng = random.Random()
        return lambda index: rng.random()
    return lambda index: random.Random(f"{seed}:{index}").random()


class RouteAggregator:
    """Fetches, enriches and merges regular and waypoint candidate routes"""

    def __init__(self, maps_client, settings: Optional[Settings] = None,
                 jitter: Optional[Callable[[int], float]] = None):
        self.maps_client = maps_client
        self.settings = settings or get_settings()
        self.jitter = jitter or make_jitter_source(self.settings.roughness_seed)

    async def _call(self, coro, what: str):
        try:
            return await asyncio.wait_for(coro, timeout=self.settings.provider_timeout_seconds)
        except asyncio.TimeoutError as e:
            raise ProviderFailure(f"{what} timed out") from e

    async def resolve_location(self, location: Location) -> Coordinate:
        """Coordinates pass through; addresses are geocoded"""
        if isinstance(location, Coordinate):
            return location
        if isinstance(location, (list, tuple)):
            return Coordinate(lat=location[0], lng=location[1])
        return await self._call(self.maps_client.geocode(location), f"Geocoding '{location}'")

    async def build_candidate(self, route: ProviderRoute, reports: Sequence[Report], *, index: int,
                              route_type: str, description: str,
                              waypoint: Optional[Coordinate] = None) -> CandidateRoute:
        """Attach every derived metric to a provider route"""
        metrics = compute_route_metrics(route, reports, self.jitter(index))

        endpoints = metrics.endpoints
        if endpoints:
            elevation = await get_elevation_profile(
                self.maps_client, endpoints[0], endpoints[1],
                timeout=self.settings.provider_timeout_seconds,
            )
        else:
            elevation = ElevationProfile.unavailable()

        return CandidateRoute(
            index=index,
            type=route_type,
            description=description,
            waypoint=waypoint,
            distance=metrics.distance_km,
            walking_time=metrics.walking_time,
            duration=metrics.walking_time if route_type == "waypoint" else None,
            base_skate_time=metrics.base_skate_time,
            skate_time=metrics.skate_time,
            congestion_multiplier=metrics.congestion_multiplier,
            has_congestion=metrics.has_congestion,
            num_turns=metrics.num_turns,
            roughness=metrics.roughness,
            smoothness_score=metrics.smoothness_score,
            blocked=metrics.blocked,
            polyline=route.overview_polyline,
            elevation=elevation,
            calories=calories(metrics.distance_km, metrics.skate_time, elevation),
            route=route,
        )

    async def get_regular_routes(self, start: Location, end: Location,
                                 reports: Sequence[Report]) -> List[CandidateRoute]:
        """Provider routes with alternatives; a provider failure aborts the request"""
        routes = await self._call(
            self.maps_client.directions(location_query(start), location_query(end), alternatives=True),
            "Directions request",
        )
        logger.info(f"Found {len(routes)} alternative route(s)")

        return list(await asyncio.gather(*[
            self.build_candidate(route, reports, index=index, route_type="regular",
                                 description=f"Regular route {index}")
            for index, route in enumerate(routes)
        ]))

    async def get_waypoint_route(self, origin: Coordinate, destination: Coordinate, waypoint: Waypoint,
                                 index: int, reports: Sequence[Report],
                                 semaphore: asyncio.Semaphore) -> CandidateRoute:
        """Route through a single waypoint; raises WaypointRouteUnavailable on any provider failure"""
        async with semaphore:
            try:
                routes = await self._call(
                    self.maps_client.directions(origin.as_query(), destination.as_query(),
                                                waypoint=f"{waypoint.lat},{waypoint.lng}"),
                    f"Waypoint route {index}",
                )
            except ProviderFailure as e:
                raise WaypointRouteUnavailable(f"{waypoint.description}: {e}") from e

        if not routes:
            raise WaypointRouteUnavailable(f"{waypoint.description}: no routes returned")

        return await self.build_candidate(
            routes[0], reports, index=index, route_type="waypoint",
            description=waypoint.description, waypoint=waypoint.as_coordinate(),
        )

    async def get_waypoint_routes(self, start: Location, end: Location,
                                  reports: Sequence[Report]) -> List[CandidateRoute]:
        """Candidates through generated waypoints; unavailable ones are dropped"""
        start_coords, end_coords = await asyncio.gather(
            self.resolve_location(start),
            self.resolve_location(end),
        )

        waypoints = generate_waypoints(start_coords, end_coords)
        logger.info(f"Testing {len(waypoints)} waypoint configurations...")

        semaphore = asyncio.Semaphore(max(1, self.settings.max_waypoint_requests))
        results = await asyncio.gather(*[
            self.get_waypoint_route(start_coords, end_coords, waypoint, -(idx + 1), reports, semaphore)
            for idx, waypoint in enumerate(waypoints)
        ], return_exceptions=True)

        routes = []
        for result in results:
            if isinstance(result, WaypointRouteUnavailable):
                logger.warning(f"Dropping waypoint route: {result}")
            elif isinstance(result, BaseException):
                raise result
            else:
                routes.append(result)

        logger.info(f"Found {len(routes)} valid waypoint routes")
        return routes

    async def get_all_routes(self, start: Location, end: Location,
                             reports: Sequence[Report]) -> List[CandidateRoute]:
        """Regular routes followed by waypoint routes"""
        results = await asyncio.gather(
            self.get_regular_routes(start, end, reports),
            self.get_waypoint_routes(start, end, reports),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

        regular_routes, waypoint_routes = results
        logger.info(
            f"Total routes found: {len(regular_routes) + len(waypoint_routes)} "
            f"({len(regular_routes)} regular + {len(waypoint_routes)} waypoint)"
        )
        return regular_routes + waypoint_routes
