import asyncio
import time

import pytest
import requests

from geo.distance import Coordinate, distance_miles
from geo.geocoder_client import GeocoderClient, GeocodingError
from geo.locations import FALLBACK_COORDINATES, is_geocoding_enabled, lookup_fallback
from geo.resolver import FallbackTableResolver, GeocodeCache, GeocodingResolver


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """
    Stands in for requests.Session; records every GET.
    """
    def __init__(self, response=None, error=None, delay=0.0):
        self.response = response
        self.error = error
        self.delay = delay
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return self.response


def make_resolver(session):
    client = GeocoderClient(base_url="http://geo.test", user_agent="freight-match-tests", timeout=2, session=session)
    return GeocodingResolver(client=client, cache=GeocodeCache())


# ---- distance ----

def test_distance_to_self_is_zero():
    miami = Coordinate(25.7617, -80.1918)
    assert distance_miles(miami, miami) == 0


def test_distance_new_york_to_los_angeles():
    new_york = Coordinate(40.7128, -74.0060)
    los_angeles = Coordinate(34.0522, -118.2437)
    assert distance_miles(new_york, los_angeles) == pytest.approx(2445, rel=0.01)
    assert distance_miles(new_york, los_angeles) == pytest.approx(distance_miles(los_angeles, new_york))


# ---- fallback table ----

def test_table_has_state_and_city_keys():
    assert "fl" in FALLBACK_COORDINATES
    assert "florida" in FALLBACK_COORDINATES
    assert "miami" in FALLBACK_COORDINATES
    assert len(FALLBACK_COORDINATES) >= 130


def test_lookup_exact_partial_city_and_state():
    assert lookup_fallback("  MIAMI ") == FALLBACK_COORDINATES["miami"]
    assert lookup_fallback("Miami, FL") == FALLBACK_COORDINATES["miami"]
    assert lookup_fallback("Ocala, FL") == FALLBACK_COORDINATES["fl"]
    assert lookup_fallback("Fort Smith, Arkansas") == FALLBACK_COORDINATES["arkansas"]
    assert lookup_fallback("Kansas City, MO") == FALLBACK_COORDINATES["kansas city"]


def test_two_letter_keys_do_not_match_inside_words():
    # "ma" and "ne" must not leak into Omaha
    assert lookup_fallback("Omaha, NE") is None
    assert lookup_fallback("") is None
    assert lookup_fallback(None) is None


def test_geocoding_enabled_regions():
    assert is_geocoding_enabled("Boise, ID")
    assert is_geocoding_enabled("Billings Montana")
    assert not is_geocoding_enabled("Omaha, NE")
    assert not is_geocoding_enabled("")


@pytest.mark.parametrize("location, enabled", [
    ("Billings MT", True),
    ("Billings, mt ", True),
    ("Boise, Idaho", True),
    ("Mt Vernon, NE", False),
    ("Id Street, Omaha NE", False),
    ("Ct Drive", False),
])
def test_region_abbreviation_only_counts_as_state_part(location, enabled):
    assert is_geocoding_enabled(location) is enabled


def test_fallback_resolver_is_table_only():
    resolver = FallbackTableResolver()
    assert resolver("Atlanta, GA") == FALLBACK_COORDINATES["atlanta"]
    assert resolver("Boise, ID") is None


# ---- geocoder client ----

def test_client_sends_country_hint_and_identifier():
    session = FakeSession(FakeResponse(200, [{"lat": "43.6150", "lon": "-116.2023"}]))
    client = GeocoderClient(base_url="http://geo.test/", user_agent="freight-match-tests", timeout=2, session=session)

    point = client.search(" Boise, ID ")

    assert point == Coordinate(43.615, -116.2023)
    call = session.calls[0]
    assert call["url"] == "http://geo.test/search"
    assert call["params"]["q"] == "Boise, ID, USA"
    assert call["headers"]["User-Agent"] == "freight-match-tests"
    assert call["timeout"] == 2


def test_client_empty_result_is_none():
    session = FakeSession(FakeResponse(200, []))
    client = GeocoderClient(base_url="http://geo.test", session=session)
    assert client.search("Nowhere, ID") is None


@pytest.mark.parametrize("session", [
    FakeSession(FakeResponse(503, [])),
    FakeSession(error=requests.ConnectionError("boom")),
    FakeSession(FakeResponse(200, ValueError("not json"))),
    FakeSession(FakeResponse(200, [{"display_name": "no coords"}])),
])
def test_client_failures_raise_geocoding_error(session):
    client = GeocoderClient(base_url="http://geo.test", session=session)
    with pytest.raises(GeocodingError):
        client.search("Boise, ID")


# ---- async resolver + cache ----

def test_resolver_caches_positive_results():
    session = FakeSession(FakeResponse(200, [{"lat": "43.6150", "lon": "-116.2023"}]))
    resolver = make_resolver(session)

    first = asyncio.run(resolver("Boise, ID"))
    second = asyncio.run(resolver("  boise, id"))

    assert first == second == Coordinate(43.615, -116.2023)
    assert len(session.calls) == 1


@pytest.mark.parametrize("session", [
    FakeSession(FakeResponse(500, None)),
    FakeSession(FakeResponse(200, [])),
    FakeSession(error=requests.Timeout("slow")),
])
def test_resolver_caches_negative_results(session):
    resolver = make_resolver(session)

    assert asyncio.run(resolver("Nowhere, ID")) is None
    assert asyncio.run(resolver("Nowhere, ID")) is None

    assert len(session.calls) == 1
    assert "nowhere, id" in resolver.cache


def test_resolver_shares_concurrent_lookups():
    session = FakeSession(FakeResponse(200, [{"lat": "46.7833", "lon": "-100.7837"}]), delay=0.05)
    resolver = make_resolver(session)

    async def resolve_many():
        return await asyncio.gather(*(resolver("Bismarck, ND") for _ in range(6)))

    points = asyncio.run(resolve_many())

    assert points == [Coordinate(46.7833, -100.7837)] * 6
    assert len(session.calls) == 1
    assert resolver._in_flight == {}


def test_resolver_uses_table_before_geocoder():
    session = FakeSession(FakeResponse(200, [{"lat": "0", "lon": "0"}]))
    resolver = make_resolver(session)

    assert asyncio.run(resolver("Miami, FL")) == FALLBACK_COORDINATES["miami"]
    assert session.calls == []


def test_resolver_skips_geocoder_outside_enabled_regions():
    session = FakeSession(FakeResponse(200, [{"lat": "41.2565", "lon": "-95.9345"}]))
    resolver = make_resolver(session)

    assert asyncio.run(resolver("Omaha, NE")) is None
    assert session.calls == []


def test_cache_distinguishes_missing_from_negative():
    cache = GeocodeCache()
    sentinel = object()
    assert cache.get("Boise, ID", sentinel) is sentinel

    cache.set(" Boise, ID ", None)
    assert cache.get("boise, id", sentinel) is None
    assert len(cache) == 1
