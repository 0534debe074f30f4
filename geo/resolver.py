from __future__ import annotations

import asyncio
import logging
import threading
from typing import Awaitable, Callable, Dict, Optional

from .distance import Coordinate
from .geocoder_client import GeocoderClient, GeocodingError
from .locations import is_geocoding_enabled, lookup_fallback, normalize_location

logger = logging.getLogger(__name__)

# ---- Types the scoring layer plugs into ----
# Give it a location string, get back a coordinate or None.
CoordinateResolver = Callable[[str], Optional[Coordinate]]
AsyncCoordinateResolver = Callable[[str], Awaitable[Optional[Coordinate]]]

_MISSING = object()


class GeocodeCache:
    """
    Process-lifetime memo of location string -> Coordinate (or None for a
    known miss). Entries are never evicted; concurrent writers for the same
    key store the same value so last write wins.
    """
    def __init__(self):
        self._entries: Dict[str, Optional[Coordinate]] = {}
        self._lock = threading.Lock()

    def get(self, location: str, default=_MISSING):
        with self._lock:
            return self._entries.get(normalize_location(location), default)

    def set(self, location: str, point: Optional[Coordinate]) -> None:
        with self._lock:
            self._entries[normalize_location(location)] = point

    def __contains__(self, location: str) -> bool:
        with self._lock:
            return normalize_location(location) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class FallbackTableResolver:
    """
    Synchronous resolver backed only by the static table. Never does I/O.
    """
    def __call__(self, location: str) -> Optional[Coordinate]:
        return lookup_fallback(location)


class GeocodingResolver:
    """
    Async resolver: static table first, then the external geocoder for
    geocoding-enabled regions. Hits and misses are both cached so a given
    string reaches the geocoder at most once. Concurrent lookups of the same
    string share the one in-flight request.
    """
    def __init__(self, client: Optional[GeocoderClient] = None, cache: Optional[GeocodeCache] = None):
        self.client = client or GeocoderClient()
        self.cache = cache if cache is not None else GeocodeCache()
        self._in_flight: Dict[str, asyncio.Task] = {}

    async def __call__(self, location: str) -> Optional[Coordinate]:
        text = normalize_location(location)
        if not text:
            return None

        cached = self.cache.get(text)
        if cached is not _MISSING:
            logger.debug(f"Geocode cache hit for {text!r}")
            return cached

        point = lookup_fallback(text)
        if point is not None:
            self.cache.set(text, point)
            return point

        if not is_geocoding_enabled(text):
            return None

        task = self._in_flight.get(text)
        if task is None:
            task = asyncio.ensure_future(self._geocode(text, location))
            self._in_flight[text] = task
            task.add_done_callback(lambda _: self._in_flight.pop(text, None))
        else:
            logger.debug(f"Joining in-flight geocode for {text!r}")

        # a cancelled waiter leaves the shared lookup running for the others
        return await asyncio.shield(task)

    async def _geocode(self, text: str, location: str) -> Optional[Coordinate]:
        try:
            point = await asyncio.to_thread(self.client.search, location)
        except GeocodingError as e:
            logger.warning(f"Geocoding failed for {location!r}: {e}")
            point = None

        self.cache.set(text, point)
        return point
