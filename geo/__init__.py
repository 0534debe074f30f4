#Marks geo as a package.
#Re-exports the public API (Coordinate, distance_miles, resolvers, geocoder client)
#so other modules import from geo without knowing internal file names.
#No business logic.

from .distance import Coordinate, distance_miles
from .geocoder_client import GeocoderClient, GeocodingError
from .locations import is_geocoding_enabled, lookup_fallback
from .resolver import (
    AsyncCoordinateResolver,
    CoordinateResolver,
    FallbackTableResolver,
    GeocodeCache,
    GeocodingResolver,
)

__all__ = [
    "Coordinate",
    "distance_miles",
    "GeocoderClient",
    "GeocodingError",
    "is_geocoding_enabled",
    "lookup_fallback",
    "CoordinateResolver",
    "AsyncCoordinateResolver",
    "FallbackTableResolver",
    "GeocodeCache",
    "GeocodingResolver",
]
