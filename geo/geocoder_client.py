#Purpose: The geocoder "adapter/client".
#Sole responsibility: talk to the public geocoding service via HTTP and return
#a normalized Coordinate (or None when the service has no answer).
#Encapsulates service-specific details:
#URL construction (/search) and query params
#client identification header
#timeouts and error handling
#parsing response JSON into our internal shape
#It should not contain caching, region rules or scoring.

import logging
import os
from typing import Optional

import requests
from dotenv import load_dotenv

from .distance import Coordinate

# Read geocoder settings from environment
# Example in .env:
# GEOCODER_BASE_URL=https://nominatim.openstreetmap.org
# GEOCODER_USER_AGENT=freight-match/1.0 (ops@example.com)
load_dotenv()
BASE_URL = os.getenv("GEOCODER_BASE_URL", "https://nominatim.openstreetmap.org")
USER_AGENT = os.getenv("GEOCODER_USER_AGENT", "freight-match/1.0")
TIMEOUT = float(os.getenv("GEOCODER_TIMEOUT", "5"))

COUNTRY_HINT = "USA"

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Raised when the geocoder cannot be reached or answers badly."""
    pass


class GeocoderClient:
    """
    Geocoder Adapter / Client

    Sole responsibility:
    - Send one free-text search to the geocoding service
    - Return the first result as a Coordinate, or None if there is none
    - Raise GeocodingError for transport failures and non-OK answers
    """
    def __init__(self, base_url: Optional[str] = None, user_agent: Optional[str] = None,
                 timeout: Optional[float] = None, session=None):
        self.base_url = (base_url or BASE_URL).rstrip("/")
        self.user_agent = user_agent or USER_AGENT
        self.timeout = timeout if timeout is not None else TIMEOUT  # seconds before giving up
        self.session = session or requests.Session()

        if not self.base_url:
            raise ValueError("Geocoder base URL not set. Please set GEOCODER_BASE_URL in the .env file.")

    def build_query(self, location: str) -> str:
        """'Miami, FL' -> 'Miami, FL, USA'"""
        return f"{location.strip()}, {COUNTRY_HINT}"

    def search(self, location: str) -> Optional[Coordinate]:
        """
        calls the /search endpoint for a single location string.

        Returns:
            Coordinate of the first result, or None for an empty result list.
        """
        query = self.build_query(location)
        url = f"{self.base_url}/search"

        try:
            response = self.session.get(
                url,
                params={
                    "q": query,
                    "format": "json",
                    "limit": 1,
                },
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise GeocodingError(f"Geocoder request failed for {query!r}: {e}") from e

        if response.status_code != 200:
            raise GeocodingError(f"Geocoder returned HTTP {response.status_code} for {query!r}")

        try:
            results = response.json()
        except ValueError as e:
            raise GeocodingError(f"Geocoder returned invalid JSON for {query!r}") from e

        if not results:
            logger.debug(f"Geocoder has no results for {query!r}")
            return None

        try:
            first = results[0]
            return Coordinate(float(first["lat"]), float(first["lon"]))
        except (IndexError, KeyError, TypeError, ValueError) as e:
            raise GeocodingError(f"Geocoder result for {query!r} has no usable lat/lon") from e
