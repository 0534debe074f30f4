"""
Purpose: The 100-point match score between one driver and one load.
What it does:

Computes five integer sub-scores:

vehicle_match (0-25) – equipment fit (the hard gate already ran)
qualification_match (0-20) – share of non-trailer requirements the driver's certifications cover
location_score (0-35) – distance tier between driver location and load origin
rating_score (0-10) – driver rating scaled from 0-5
compliance_score (0-10) – Green/Yellow/Red from the compliance classifier

The sync and async entry points differ only in how coordinates are obtained;
both hand the coordinates to the same `build_breakdown`.

Rule: Scoring never raises for missing optional fields; it falls back to
neutral points instead.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from compliance.classifier import ComplianceClassifier, ComplianceStatus, classify_driver
from drivers.models import Driver
from geo.distance import Coordinate, distance_miles
from geo.resolver import AsyncCoordinateResolver, CoordinateResolver, FallbackTableResolver
from loads.models import Load

from .equipment import certification_requirements, get_driver_trailer_types, trailer_requirements
from .policy import MatchingPolicy, default_matching_policy
from .terms import any_terms_match, normalize_term, terms_match


@dataclass(frozen=True)
class MatchScoreBreakdown:
    vehicle_match: int
    qualification_match: int
    location_score: int
    rating_score: int
    compliance_score: int

    def total(self) -> int:
        return (
            self.vehicle_match
            + self.qualification_match
            + self.location_score
            + self.rating_score
            + self.compliance_score
        )

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def vehicle_score(driver: Driver, load: Load, policy: MatchingPolicy) -> int:
    if normalize_term(load.trailer_type):
        # only compatible drivers get this far
        return policy.vehicle_max

    required = trailer_requirements(load)
    if required:
        if any_terms_match(get_driver_trailer_types(driver), required):
            return policy.vehicle_max
        return policy.vehicle_partial

    return policy.vehicle_partial


def qualification_score(driver: Driver, load: Load, policy: MatchingPolicy) -> int:
    required = certification_requirements(load)
    if not required:
        return policy.qualification_max

    matched = sum(
        1 for requirement in required
        if any(terms_match(cert, requirement) for cert in driver.certifications)
    )
    return _round_half_up(policy.qualification_max * matched / len(required))


def location_score_for_distance(miles: float, policy: Optional[MatchingPolicy] = None) -> int:
    """
    Points for a driver `miles` away from pickup. Non-increasing in distance.
    """
    policy = policy or default_matching_policy()
    for max_miles, points in policy.location_tiers:
        if miles <= max_miles:
            return points
    return policy.location_floor


def location_score(driver_point: Optional[Coordinate], origin_point: Optional[Coordinate],
                   policy: MatchingPolicy) -> int:
    if driver_point is None or origin_point is None:
        return policy.location_unresolved
    return location_score_for_distance(distance_miles(driver_point, origin_point), policy)


def rating_score(driver: Driver, policy: MatchingPolicy) -> int:
    if driver.rating is None or not math.isfinite(driver.rating) or driver.rating <= 0:
        return policy.rating_neutral
    rating = min(driver.rating, 5.0)
    return _round_half_up(rating / 5 * policy.rating_max)


def compliance_score(status: Optional[ComplianceStatus], policy: MatchingPolicy) -> int:
    if status == ComplianceStatus.GREEN:
        return policy.compliance_green
    if status == ComplianceStatus.YELLOW:
        return policy.compliance_yellow
    return 0


def build_breakdown(
    driver: Driver,
    load: Load,
    driver_point: Optional[Coordinate],
    origin_point: Optional[Coordinate],
    status: Optional[ComplianceStatus],
    policy: MatchingPolicy,
) -> MatchScoreBreakdown:
    """
    Single source of the weighting logic, once coordinates are known.
    """
    return MatchScoreBreakdown(
        vehicle_match=vehicle_score(driver, load, policy),
        qualification_match=qualification_score(driver, load, policy),
        location_score=location_score(driver_point, origin_point, policy),
        rating_score=rating_score(driver, policy),
        compliance_score=compliance_score(status, policy),
    )


def calculate_match_score(
    driver: Driver,
    load: Load,
    *,
    resolver: Optional[CoordinateResolver] = None,
    classifier: Optional[ComplianceClassifier] = None,
    policy: Optional[MatchingPolicy] = None,
) -> MatchScoreBreakdown:
    """
    Score a driver against a load using a synchronous coordinate resolver
    (the static fallback table unless another is given).
    """
    resolver = resolver or FallbackTableResolver()
    classifier = classifier or classify_driver
    policy = policy or default_matching_policy()

    return build_breakdown(
        driver,
        load,
        resolver(driver.location),
        resolver(load.origin),
        classifier(driver),
        policy,
    )


async def calculate_match_score_async(
    driver: Driver,
    load: Load,
    *,
    resolver: AsyncCoordinateResolver,
    classifier: Optional[ComplianceClassifier] = None,
    policy: Optional[MatchingPolicy] = None,
) -> MatchScoreBreakdown:
    """
    Same as `calculate_match_score` but coordinates may come from the
    external geocoder.
    """
    classifier = classifier or classify_driver
    policy = policy or default_matching_policy()

    driver_point = await resolver(driver.location)
    origin_point = await resolver(load.origin)

    return build_breakdown(driver, load, driver_point, origin_point, classifier(driver), policy)


def get_total_score(breakdown: MatchScoreBreakdown) -> int:
    return breakdown.total()
