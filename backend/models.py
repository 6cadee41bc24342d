from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel
from typing import Annotated, Any, Dict, List, Optional, Union


class Coordinate(BaseModel):
    lat: float
    lng: float

    def as_point(self):
        return (self.lat, self.lng)

    def as_query(self) -> str:
        """Provider "lat,lng" string"""
        return f"{self.lat},{self.lng}"


class Report(BaseModel):
    """User-submitted point observation (smoothness, congestion, construction, ...)"""
    model_config = ConfigDict(extra="allow", frozen=True)

    id: Optional[int] = None
    lat: float
    lng: float
    type: str
    rating: Optional[float] = None  # 1-5, smoothness reports
    congestion: Optional[float] = None  # 1-5, congestion reports

    def as_point(self):
        return (self.lat, self.lng)


class Waypoint(BaseModel):
    lat: float
    lng: float
    description: str

    def as_point(self):
        return (self.lat, self.lng)

    def as_coordinate(self) -> Coordinate:
        return Coordinate(lat=self.lat, lng=self.lng)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ElevationProfile(CamelModel):
    difference: float = 0.0
    abs_difference: float = 0.0
    direction: str = "flat"  # uphill, downhill, flat
    difficulty: str = "unknown"
    difficulty_color: str = "#999"
    start_elevation: float = 0.0
    end_elevation: float = 0.0
    available: bool = False

    @classmethod
    def unavailable(cls) -> "ElevationProfile":
        """Neutral profile used when the elevation provider fails"""
        return cls()


class CandidateRoute(CamelModel):
    index: int
    type: str  # regular, waypoint
    description: str
    waypoint: Optional[Coordinate] = None
    distance: float  # km
    walking_time: float  # minutes
    duration: Optional[float] = None  # minutes, waypoint routes
    base_skate_time: float
    skate_time: float
    congestion_multiplier: float
    has_congestion: bool
    num_turns: int
    roughness: float
    smoothness_score: float
    blocked: bool
    polyline: str
    elevation: ElevationProfile
    calories: int

    # Parsed provider route; never serialized
    route: Any = Field(default=None, exclude=True)

    @model_serializer(mode="wrap")
    def _omit_waypoint_fields(self, handler) -> Dict[str, Any]:
        # Only waypoint routes carry waypoint and duration
        data = handler(self)
        for key in ("waypoint", "duration"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class OptimalPaths(CamelModel):
    shortest_path: CandidateRoute
    safest_path: CandidateRoute
    smoothest_path: CandidateRoute
    balanced_path: CandidateRoute
    single_turn_path: Optional[CandidateRoute] = None
    all_routes: List[CandidateRoute]


# Request / response models for the API

LatLngPair = Annotated[List[float], Field(min_length=2, max_length=2)]

Location = Union[Coordinate, LatLngPair, str]


class RouteRequest(BaseModel):
    start: Optional[Location] = None  # address, {lat, lng} or [lat, lng]
    end: Optional[Location] = None
    reports: Optional[List[Report]] = None


class HealthResponse(BaseModel):
    status: str
    message: str
    reports: int
