"""
Runtime configuration for the Skate Scout routing API
Reads provider credentials, timeouts and server settings from the environment
"""

import os
import logging
from functools import lru_cache
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class Settings:
    """Environment-backed settings for the routing service"""

    def __init__(self):
        # Google Maps web services
        self.google_maps_api_key = os.getenv('GOOGLE_MAPS_API_KEY', '')
        self.google_maps_base_url = os.getenv('GOOGLE_MAPS_BASE_URL', 'https://maps.googleapis.com/maps/api').rstrip('/')

        # Provider call limits
        self.provider_timeout_seconds = float(os.getenv('PROVIDER_TIMEOUT_SECONDS', '10'))
        self.max_waypoint_requests = int(os.getenv('MAX_WAYPOINT_REQUESTS', '6'))

        # Roughness jitter source; unseeded when not set
        seed = os.getenv('ROUGHNESS_SEED')
        self.roughness_seed: Optional[int] = int(seed) if seed else None

        # Server settings
        self.cors_origins: List[str] = [
            origin.strip() for origin in os.getenv('CORS_ORIGINS', '*').split(',') if origin.strip()
        ]
        self.log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.host = os.getenv('HOST', '0.0.0.0')
        self.port = int(os.getenv('PORT', '3000'))

        if not self.google_maps_api_key:
            logger.warning("GOOGLE_MAPS_API_KEY is not set; provider requests will be rejected")


@lru_cache()
def get_settings() -> Settings:
    """Get the process-wide settings instance"""
    return Settings()
