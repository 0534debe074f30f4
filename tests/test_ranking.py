import asyncio
import random
import time

import pytest

from compliance.classifier import ComplianceStatus
from drivers.models import Availability, Driver
from geo.resolver import GeocodeCache, GeocodingResolver
from loads.models import Load, LoadStatus
from matching.equipment import is_equipment_compatible
from matching.policy import MatchingOptions
from matching.ranking import (
    find_matching_drivers,
    find_matching_drivers_async,
    find_matching_loads,
    find_matching_loads_async,
)


def green(driver):
    return ComplianceStatus.GREEN


class CountingClient:
    """
    Geocoder stand-in: answers from a dict and counts lookups.
    """
    def __init__(self, answers=None, delay=0.0):
        self.answers = answers or {}
        self.delay = delay
        self.calls = []

    def search(self, location):
        self.calls.append(location)
        if self.delay:
            time.sleep(self.delay)
        return self.answers.get(location)


@pytest.fixture
def reefer_load():
    return Load.new("load_1", "Miami, FL", "Atlanta, GA", trailer_type="refrigerated")


def assert_well_ranked(results):
    for index, match in enumerate(results):
        assert match.rank == index + 1
        assert match.is_best_match == (index == 0)
        assert match.score == match.breakdown.total()
    for current, following in zip(results, results[1:]):
        assert current.score >= following.score
    assert sum(1 for match in results if match.is_best_match) == (1 if results else 0)


def test_best_reefer_driver_ranks_first(reefer_load):
    driver = Driver.new("driver_reefer", "Miami, FL", trailer_types=["reefer"], rating=4.5,
                        availability="Available")

    results = find_matching_drivers(reefer_load, [driver], classifier=green)

    assert len(results) == 1
    assert results[0].driver.id == "driver_reefer"
    assert results[0].score == 99
    assert results[0].rank == 1
    assert results[0].is_best_match


def test_incompatible_driver_never_ranked():
    load = Load.new("load_1", "Miami, FL", trailer_type="flatbed")
    perfect_but_wrong = Driver.new("dry_van", "Miami, FL", vehicle_type="dry-van", rating=5.0)
    mediocre = Driver.new("flatbed", "Seattle, WA", trailer_types=["flatbed"], rating=2.0)

    results = find_matching_drivers(load, [perfect_but_wrong, mediocre], classifier=green)

    assert [match.driver.id for match in results] == ["flatbed"]


def test_max_results_keeps_only_the_best():
    load = Load.new("load_1", "Dallas, TX", trailer_type="dry-van")
    drivers = [
        Driver.new(f"driver_{rating}", "Dallas, TX", trailer_types=["dry van"], rating=rating)
        for rating in (3.0, 1.0, 5.0, 2.0, 4.0)
    ]

    results = find_matching_drivers(load, drivers, MatchingOptions(max_results=1), classifier=green)

    assert len(results) == 1
    assert results[0].driver.id == "driver_5.0"
    assert results[0].rank == 1
    assert results[0].is_best_match


def test_eligibility_options():
    load = Load.new("load_1", "Atlanta, GA")
    drivers = [
        Driver.new("available", "Atlanta, GA"),
        Driver.new("on_trip", "Atlanta, GA", availability=Availability.ON_TRIP),
        Driver.new("off_duty", "Atlanta, GA", availability="Off-duty"),
    ]
    statuses = {"available": ComplianceStatus.YELLOW, "on_trip": ComplianceStatus.GREEN,
                "off_duty": ComplianceStatus.GREEN}

    def classifier(driver):
        return statuses[driver.id]

    # defaults: available AND green -> nobody
    assert find_matching_drivers(load, drivers, classifier=classifier) == []

    relaxed = MatchingOptions(only_available=False, only_green_compliance=False, max_results=None)
    results = find_matching_drivers(load, drivers, relaxed, classifier=classifier)
    assert {match.driver.id for match in results} == {"available", "on_trip", "off_duty"}

    only_green = MatchingOptions(only_available=False)
    assert {m.driver.id for m in find_matching_drivers(load, drivers, only_green, classifier=classifier)} == {
        "on_trip", "off_duty"
    }


def test_caller_predicates_apply():
    load = Load.new("load_1", "Atlanta, GA")
    drivers = [Driver.new("active", "Atlanta, GA"), Driver.new("inactive", "Atlanta, GA", is_active=False)]

    options = MatchingOptions(predicates=(lambda driver: driver.is_active,))
    results = find_matching_drivers(load, drivers, options, classifier=green)

    assert [match.driver.id for match in results] == ["active"]


def test_ties_keep_pool_order():
    load = Load.new("load_1", "Tampa, FL")
    drivers = [Driver.new(f"twin_{i}", "Tampa, FL", rating=4.0) for i in range(4)]

    results = find_matching_drivers(load, drivers, classifier=green)

    assert [match.driver.id for match in results] == ["twin_0", "twin_1", "twin_2", "twin_3"]
    assert_well_ranked(results)


def test_nan_rating_ranks_as_unrated():
    load = Load.new("load_1", "Miami, FL")
    drivers = [
        Driver.new("nan", "Miami, FL", rating=float("nan")),
        Driver.new("unrated", "Miami, FL"),
    ]

    results = find_matching_drivers(load, drivers, classifier=green)

    assert [match.driver.id for match in results] == ["nan", "unrated"]
    assert results[0].breakdown.rating_score == 5
    assert results[0].score == results[1].score
    assert_well_ranked(results)


def test_empty_pool_has_no_best_match(reefer_load):
    assert find_matching_drivers(reefer_load, [], classifier=green) == []


def test_negative_max_results_rejected(reefer_load):
    with pytest.raises(ValueError):
        find_matching_drivers(reefer_load, [], MatchingOptions(max_results=-1))


def test_random_pools_hold_ranking_invariants():
    """
    Hard filter, bounds and ordering over a seeded random marketplace.
    """
    rng = random.Random(7)
    cities = ["Miami, FL", "Dallas, TX", "Chicago, IL", "Seattle, WA", "Omaha, NE", "Boise, ID", ""]
    trailers = ["reefer", "flatbed", "dry-van", "tanker", "step deck", "hopper"]

    drivers = []
    for i in range(60):
        if rng.random() < 0.2:
            equipment = {"vehicle_type": rng.choice(trailers)}
        else:
            equipment = {"trailer_types": rng.sample(trailers, rng.randint(0, 2))}
        drivers.append(Driver.new(
            f"driver_{i}", rng.choice(cities),
            certifications=rng.sample(["hazmat", "twic"], rng.randint(0, 2)),
            rating=rng.choice([None, 1.5, 3.0, 4.2, 5.0]),
            **equipment,
        ))

    loads = [
        Load.new("explicit", "Dallas, TX", trailer_type="refrigerated"),
        Load.new("legacy", "Chicago, IL", required_qualifications=["open deck", "hazmat"]),
        Load.new("legacy_van", "Seattle, WA", required_qualifications=["Dry Van"]),
        Load.new("open", "Miami, FL", required_qualifications=["twic"]),
    ]

    for load in loads:
        results = find_matching_drivers(load, drivers, MatchingOptions(max_results=None), classifier=green)
        assert_well_ranked(results)
        for match in results:
            assert is_equipment_compatible(match.driver, load)
            assert 0 <= match.score <= 100

        ranked_ids = {match.driver.id for match in results}
        for driver in drivers:
            if not is_equipment_compatible(driver, load):
                assert driver.id not in ranked_ids


def test_matching_loads_only_pending_and_compatible():
    driver = Driver.new("driver_1", "Atlanta, GA", trailer_types=["flatbed"], rating=4.0)
    loads = [
        Load.new("near", "Atlanta, GA", trailer_type="open-deck"),
        Load.new("far", "Seattle, WA", trailer_type="flatbed"),
        Load.new("taken", "Atlanta, GA", trailer_type="flatbed", status=LoadStatus.MATCHED),
        Load.new("reefer", "Atlanta, GA", trailer_type="reefer"),
        Load.new("anything", "Savannah, GA", status="Pending"),
    ]

    results = find_matching_loads(driver, loads, classifier=green)

    assert [match.load.id for match in results] == ["near", "anything", "far"]
    assert_well_ranked(results)
    assert find_matching_loads(driver, loads, max_results=1, classifier=green)[0].load.id == "near"


def test_async_skips_geocoder_for_unsupported_region(reefer_load):
    client = CountingClient()
    resolver = GeocodingResolver(client=client, cache=GeocodeCache())
    driver = Driver.new("omaha", "Omaha, NE", trailer_types=["reefer"], rating=5.0)

    results = asyncio.run(find_matching_drivers_async(reefer_load, [driver], resolver=resolver, classifier=green))

    assert results[0].breakdown.location_score == 10
    assert client.calls == []


def test_async_geocodes_once_per_location():
    from geo.distance import Coordinate

    client = CountingClient({"Boise, ID": Coordinate(43.6150, -116.2023)}, delay=0.05)
    resolver = GeocodingResolver(client=client, cache=GeocodeCache())
    load = Load.new("load_1", "Boise, ID", trailer_type="flatbed")
    drivers = [Driver.new(f"boise_{i}", "Boise, ID", trailer_types=["flatbed"]) for i in range(8)]

    first = asyncio.run(find_matching_drivers_async(load, drivers, resolver=resolver, classifier=green))
    calls_after_first = len(client.calls)
    second = asyncio.run(find_matching_drivers_async(load, drivers, resolver=resolver, classifier=green))

    assert all(match.breakdown.location_score == 35 for match in first + second)
    assert [m.driver.id for m in first] == [m.driver.id for m in second]
    assert calls_after_first == 1
    assert client.calls == ["Boise, ID"]


def test_async_and_sync_rank_identically_on_table_locations():
    resolver = GeocodingResolver(client=CountingClient(), cache=GeocodeCache())
    load = Load.new("load_1", "Nashville, TN", required_qualifications=["reefer", "hazmat"])
    drivers = [
        Driver.new("a", "Memphis, TN", trailer_types=["reefer"], certifications=["hazmat"], rating=4.0),
        Driver.new("b", "Nashville, TN", trailer_types=["refrigerated"], rating=3.0),
        Driver.new("c", "Chicago, IL", trailer_types=["cold"], certifications=["hazmat"], rating=5.0),
        Driver.new("d", "Knoxville, TN", trailer_types=["flatbed"], rating=5.0),
    ]

    sync_results = find_matching_drivers(load, drivers, classifier=green)
    async_results = asyncio.run(find_matching_drivers_async(load, drivers, resolver=resolver, classifier=green))

    assert [(m.driver.id, m.score) for m in sync_results] == [(m.driver.id, m.score) for m in async_results]
    assert "d" not in [m.driver.id for m in sync_results]


def test_async_matching_loads():
    resolver = GeocodingResolver(client=CountingClient(), cache=GeocodeCache())
    driver = Driver.new("driver_1", "Houston, TX", trailer_types=["tanker"])
    loads = [
        Load.new("tank_far", "Chicago, IL", trailer_type="liquid bulk"),
        Load.new("tank_near", "Houston, TX", trailer_type="tanker"),
        Load.new("van", "Houston, TX", trailer_type="dry-van"),
    ]

    results = asyncio.run(find_matching_loads_async(driver, loads, resolver=resolver, classifier=green))

    assert [match.load.id for match in results] == ["tank_near", "tank_far"]
    assert results[0].is_best_match
