"""
Elevation difference between the two ends of a route.

Best effort: any provider failure degrades to the neutral "unknown" profile
instead of failing the route.
"""

import asyncio
import logging

from models import ElevationProfile
from services.errors import ElevationUnavailable
from services.geometry import Point
from services.route_metrics import classify_elevation

logger = logging.getLogger(__name__)


async def _lookup(maps_client, point: Point, timeout: float) -> float:
    try:
        return await asyncio.wait_for(maps_client.elevation(point[0], point[1]), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise ElevationUnavailable(f"Elevation lookup timed out at {point}") from e


async def get_elevation_profile(maps_client, start: Point, end: Point, timeout: float = 10.0) -> ElevationProfile:
    """Look up both endpoints concurrently and classify the climb"""
    try:
        start_elevation, end_elevation = await asyncio.gather(
            _lookup(maps_client, start, timeout),
            _lookup(maps_client, end, timeout),
        )
    except ElevationUnavailable as e:
        logger.warning(f"Elevation unavailable, using neutral profile: {e}")
        return ElevationProfile.unavailable()

    return classify_elevation(start_elevation, end_elevation)
