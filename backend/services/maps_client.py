"""
Google Maps web services adapter.

Sole responsibility: talk to the directions, geocoding and elevation APIs
over HTTP and return normalized outputs. It does not score or select routes.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from config import Settings, get_settings
from models import Coordinate
from services.errors import ElevationUnavailable, ProviderFailure

logger = logging.getLogger(__name__)


@dataclass
class ProviderStep:
    maneuver: str = ""


@dataclass
class ProviderLeg:
    distance_m: float
    duration_s: float
    steps: List[ProviderStep] = field(default_factory=list)


@dataclass
class ProviderRoute:
    legs: List[ProviderLeg]
    overview_polyline: str

    @property
    def distance_km(self) -> float:
        return sum(leg.distance_m for leg in self.legs) / 1000

    @property
    def duration_minutes(self) -> float:
        return sum(leg.duration_s for leg in self.legs) / 60

    @property
    def total_steps(self) -> int:
        return sum(len(leg.steps) for leg in self.legs)

    @classmethod
    def from_google(cls, data: Dict[str, Any]) -> "ProviderRoute":
        """Build from one entry of a Directions API "routes" array"""
        legs = []
        for leg in data.get("legs", []):
            legs.append(ProviderLeg(
                distance_m=leg.get("distance", {}).get("value", 0),
                duration_s=leg.get("duration", {}).get("value", 0),
                steps=[ProviderStep(maneuver=step.get("maneuver") or "") for step in leg.get("steps", [])]
            ))
        return cls(legs=legs, overview_polyline=data.get("overview_polyline", {}).get("points", ""))


class GoogleMapsClient:
    """Async client for the Google Maps directions, geocoding and elevation APIs"""

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self._client = httpx.AsyncClient(
            base_url=self.settings.google_maps_base_url,
            timeout=self.settings.provider_timeout_seconds,
            transport=transport,
        )

    async def aclose(self):
        await self._client.aclose()

    async def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        params = {**params, "key": self.settings.google_maps_api_key}
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise ProviderFailure(f"{path} timed out") from e
        except httpx.HTTPStatusError as e:
            raise ProviderFailure(f"{path} returned HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderFailure(f"{path} request failed: {e}") from e

    async def directions(self, origin: str, destination: str, waypoint: Optional[str] = None,
                         alternatives: bool = False) -> List[ProviderRoute]:
        """
        Walking directions from origin to destination.

        Args:
            origin: Address or "lat,lng"
            destination: Address or "lat,lng"
            waypoint: Optional single "lat,lng" to route through
            alternatives: Ask the provider for alternative routes

        Raises:
            ProviderFailure: on transport errors or a non-OK status
        """
        params = {
            "origin": origin,
            "destination": destination,
            "mode": "walking",
        }
        if waypoint:
            params["waypoints"] = waypoint
        if alternatives:
            params["alternatives"] = "true"

        data = await self._get("/directions/json", params)
        status = data.get("status")
        if status != "OK":
            raise ProviderFailure(f"Directions API error: {status}")

        return [ProviderRoute.from_google(route) for route in data.get("routes", [])]

    async def geocode(self, address: str) -> Coordinate:
        """Resolve a free-text address to a coordinate"""
        data = await self._get("/geocode/json", {"address": address})
        results = data.get("results") or []
        if data.get("status") != "OK" or not results:
            raise ProviderFailure(f"Could not geocode address: {address} ({data.get('status')})")

        location = results[0]["geometry"]["location"]
        return Coordinate(lat=location["lat"], lng=location["lng"])

    async def elevation(self, lat: float, lng: float) -> float:
        """Elevation in meters at a single point"""
        try:
            data = await self._get("/elevation/json", {"locations": f"{lat},{lng}"})
        except ProviderFailure as e:
            raise ElevationUnavailable(str(e)) from e

        results = data.get("results") or []
        if data.get("status") != "OK" or not results:
            raise ElevationUnavailable(f"Elevation API error: {data.get('status')}")
        return results[0]["elevation"]


# Global client instance, created on first use
_maps_client: Optional[GoogleMapsClient] = None


def get_maps_client() -> GoogleMapsClient:
    """Get the global Google Maps client instance"""
    global _maps_client
    if _maps_client is None:
        _maps_client = GoogleMapsClient()
    return _maps_client


async def close_maps_client():
    global _maps_client
    if _maps_client is not None:
        await _maps_client.aclose()
        _maps_client = None
