"""
Error taxonomy for route recommendation requests

Each error carries the HTTP status and the coarse message clients see; the
full detail goes to the log only.
"""


class SkateScoutError(Exception):
    """Base error for the routing service"""
    status_code = 500
    public_message = "Internal server error"

    def response_content(self) -> dict:
        if self.status_code >= 500:
            return {"error": self.public_message, "message": str(self) or self.public_message}
        return {"error": str(self) or self.public_message}


class InvalidRequest(SkateScoutError):
    """Request body is missing required fields or has malformed values"""
    status_code = 400
    public_message = "Invalid request"


class NoRoutesFound(SkateScoutError):
    """Aggregation produced an empty candidate set"""
    status_code = 404
    public_message = "No routes found"


class ProviderFailure(SkateScoutError):
    """Directions or geocoding provider returned a non-success status"""
    status_code = 500
    public_message = "Internal server error"


class ElevationUnavailable(SkateScoutError):
    """Elevation lookup failed; callers fall back to a neutral profile"""


class WaypointRouteUnavailable(SkateScoutError):
    """A single waypoint route could not be fetched; the candidate is dropped"""
