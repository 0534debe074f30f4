"""
Purpose: Business rules for choosing the best drivers for a load (and the
best loads for a driver).
What it does:
Accepts one side of the marketplace and a pool of the other side, filters out
ineligible candidates (eligibility gates, then the hard equipment gate),
scores the survivors and returns them ranked with a single best match.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from compliance.classifier import ComplianceClassifier, ComplianceStatus, classify_driver
from drivers.models import Availability, Driver
from geo.resolver import AsyncCoordinateResolver, CoordinateResolver, FallbackTableResolver
from loads.models import Load, LoadStatus

from .equipment import is_equipment_compatible
from .policy import MatchingOptions, MatchingPolicy, default_matching_policy
from .scoring import MatchScoreBreakdown, calculate_match_score, calculate_match_score_async

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class MatchScore:
    """
    A ranked driver for a load.
    """
    driver: Driver
    score: int
    breakdown: MatchScoreBreakdown
    rank: int
    is_best_match: bool


@dataclass(frozen=True)
class LoadMatchScore:
    """
    A ranked load for a driver.
    """
    load: Load
    score: int
    breakdown: MatchScoreBreakdown
    rank: int
    is_best_match: bool


def filter_eligible_drivers(
    load: Load,
    drivers: Sequence[Driver],
    options: MatchingOptions,
    classifier: ComplianceClassifier,
) -> List[Driver]:
    """
    Returns only drivers who pass every eligibility gate and can haul the load.
    """
    eligible = []

    for driver in drivers:
        if options.only_available and driver.availability != Availability.AVAILABLE:
            continue

        if options.only_green_compliance and classifier(driver) != ComplianceStatus.GREEN:
            continue

        if not all(predicate(driver) for predicate in options.predicates):
            continue

        if not is_equipment_compatible(driver, load):
            continue

        eligible.append(driver)

    return eligible


def filter_eligible_loads(
    driver: Driver,
    loads: Sequence[Load],
    predicates: Sequence[Callable[[Load], bool]] = (),
) -> List[Load]:
    """
    Pending loads this driver can haul.
    """
    eligible = []

    for load in loads:
        if load.status != LoadStatus.PENDING:
            continue

        if not all(predicate(load) for predicate in predicates):
            continue

        if not is_equipment_compatible(driver, load):
            continue

        eligible.append(load)

    return eligible


def _rank(
    scored: List[Tuple[T, MatchScoreBreakdown]],
    max_results: Optional[int],
) -> List[Tuple[T, MatchScoreBreakdown, int, bool]]:
    # sorted() is stable: equal scores keep pool order
    ordered = sorted(scored, key=lambda pair: pair[1].total(), reverse=True)

    ranked = [
        (candidate, breakdown, index + 1, index == 0)
        for index, (candidate, breakdown) in enumerate(ordered)
    ]

    if max_results:
        return ranked[:max_results]
    return ranked


def _driver_results(ranked) -> List[MatchScore]:
    return [
        MatchScore(driver=driver, score=breakdown.total(), breakdown=breakdown,
                   rank=rank, is_best_match=is_best)
        for driver, breakdown, rank, is_best in ranked
    ]


def _load_results(ranked) -> List[LoadMatchScore]:
    return [
        LoadMatchScore(load=load, score=breakdown.total(), breakdown=breakdown,
                       rank=rank, is_best_match=is_best)
        for load, breakdown, rank, is_best in ranked
    ]


def find_matching_drivers(
    load: Load,
    drivers: Sequence[Driver],
    options: Optional[MatchingOptions] = None,
    *,
    resolver: Optional[CoordinateResolver] = None,
    classifier: Optional[ComplianceClassifier] = None,
    policy: Optional[MatchingPolicy] = None,
) -> List[MatchScore]:
    """
    Rank drivers for a load, best first.

    Equipment-incompatible drivers never appear. The cap in
    `options.max_results` is applied after ranking the whole eligible pool.
    """
    options = options or MatchingOptions()
    options.validate()
    resolver = resolver or FallbackTableResolver()
    classifier = classifier or classify_driver
    policy = policy or default_matching_policy()

    eligible = filter_eligible_drivers(load, drivers, options, classifier)

    scored = [
        (driver, calculate_match_score(driver, load, resolver=resolver, classifier=classifier, policy=policy))
        for driver in eligible
    ]

    logger.debug(f"Load {load.id}: {len(eligible)} of {len(drivers)} drivers eligible")
    return _driver_results(_rank(scored, options.max_results))


def find_matching_loads(
    driver: Driver,
    loads: Sequence[Load],
    *,
    max_results: Optional[int] = 10,
    predicates: Sequence[Callable[[Load], bool]] = (),
    resolver: Optional[CoordinateResolver] = None,
    classifier: Optional[ComplianceClassifier] = None,
    policy: Optional[MatchingPolicy] = None,
) -> List[LoadMatchScore]:
    """
    Rank pending loads for a driver, best first.
    """
    MatchingOptions(max_results=max_results).validate()
    resolver = resolver or FallbackTableResolver()
    classifier = classifier or classify_driver
    policy = policy or default_matching_policy()

    eligible = filter_eligible_loads(driver, loads, predicates)

    scored = [
        (load, calculate_match_score(driver, load, resolver=resolver, classifier=classifier, policy=policy))
        for load in eligible
    ]

    logger.debug(f"Driver {driver.id}: {len(eligible)} of {len(loads)} loads eligible")
    return _load_results(_rank(scored, max_results))


async def _score_all_async(pairs: List[Tuple[Driver, Load]], resolver, classifier, policy):
    # bounded fan-out; gather keeps input order
    semaphore = asyncio.Semaphore(policy.geocode_concurrency)

    async def score_one(driver: Driver, load: Load) -> MatchScoreBreakdown:
        async with semaphore:
            return await calculate_match_score_async(
                driver, load, resolver=resolver, classifier=classifier, policy=policy
            )

    return await asyncio.gather(*(score_one(driver, load) for driver, load in pairs))


async def find_matching_drivers_async(
    load: Load,
    drivers: Sequence[Driver],
    options: Optional[MatchingOptions] = None,
    *,
    resolver: AsyncCoordinateResolver,
    classifier: Optional[ComplianceClassifier] = None,
    policy: Optional[MatchingPolicy] = None,
) -> List[MatchScore]:
    """
    `find_matching_drivers` with coordinates from an async (geocoding) resolver.
    """
    options = options or MatchingOptions()
    options.validate()
    classifier = classifier or classify_driver
    policy = policy or default_matching_policy()

    eligible = filter_eligible_drivers(load, drivers, options, classifier)
    breakdowns = await _score_all_async([(driver, load) for driver in eligible], resolver, classifier, policy)

    logger.debug(f"Load {load.id}: {len(eligible)} of {len(drivers)} drivers eligible")
    return _driver_results(_rank(list(zip(eligible, breakdowns)), options.max_results))


async def find_matching_loads_async(
    driver: Driver,
    loads: Sequence[Load],
    *,
    resolver: AsyncCoordinateResolver,
    max_results: Optional[int] = 10,
    predicates: Sequence[Callable[[Load], bool]] = (),
    classifier: Optional[ComplianceClassifier] = None,
    policy: Optional[MatchingPolicy] = None,
) -> List[LoadMatchScore]:
    """
    `find_matching_loads` with coordinates from an async (geocoding) resolver.
    """
    MatchingOptions(max_results=max_results).validate()
    classifier = classifier or classify_driver
    policy = policy or default_matching_policy()

    eligible = filter_eligible_loads(driver, loads, predicates)
    breakdowns = await _score_all_async([(driver, load) for load in eligible], resolver, classifier, policy)

    logger.debug(f"Driver {driver.id}: {len(eligible)} of {len(loads)} loads eligible")
    return _load_results(_rank(list(zip(eligible, breakdowns)), max_results))
