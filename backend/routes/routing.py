"""
Skateboard route recommendation endpoint
"""

from fastapi import APIRouter, Depends
import logging

from models import CandidateRoute, OptimalPaths, RouteRequest
from services.errors import InvalidRequest, NoRoutesFound, ProviderFailure, SkateScoutError
from services.maps_client import get_maps_client
from services.report_store import ReportStore, get_report_store
from services.route_aggregator import RouteAggregator
from services.route_selector import find_optimal_paths

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["routes"])


def get_route_aggregator(maps_client=Depends(get_maps_client)) -> RouteAggregator:
    return RouteAggregator(maps_client)


def describe_path(label: str, route: CandidateRoute) -> str:
    elevation = route.elevation
    return (
        f"   {label}: {route.distance:.2f}km, {route.skate_time:.1f}min, {route.num_turns} turns, "
        f"smoothness {route.smoothness_score:.1f}/5, {route.calories}cal, "
        f"{elevation.direction} {elevation.abs_difference}m{' BLOCKED' if route.blocked else ''}"
    )


@router.post("/routes", response_model=OptimalPaths)
async def find_routes(
    request: RouteRequest,
    aggregator: RouteAggregator = Depends(get_route_aggregator),
    store: ReportStore = Depends(get_report_store),
):
    """
    Find skateboard routes between two campus locations.

    Body reports are merged with the submitted reports in the store. Returns
    the shortest, safest (fewest turns), smoothest, balanced and single-turn
    routes plus every candidate considered.
    """
    if not request.start or not request.end:
        raise InvalidRequest("Start and end locations are required")

    all_reports = store.list() + list(request.reports or [])

    logger.info("=" * 70)
    logger.info(f"Finding routes from: {request.start} -> {request.end}")
    logger.info(f"   Active reports: {len(all_reports)}")

    try:
        candidates = await aggregator.get_all_routes(request.start, request.end, all_reports)
        paths = find_optimal_paths(candidates)
    except NoRoutesFound:
        logger.warning("No routes found")
        raise
    except ProviderFailure as e:
        logger.error(f"Provider failure: {e}")
        raise
    except Exception as e:
        logger.error(f"Route calculation failed: {e}", exc_info=True)
        raise SkateScoutError("Route calculation failed") from e

    logger.info("Routes found successfully!")
    logger.info(describe_path("Shortest", paths.shortest_path))
    logger.info(describe_path("Safest", paths.safest_path))
    logger.info(describe_path("Smoothest", paths.smoothest_path))
    logger.info(describe_path("Balanced", paths.balanced_path))
    if paths.single_turn_path:
        logger.info(describe_path("Single Turn", paths.single_turn_path))
    logger.info("=" * 70)

    return paths
