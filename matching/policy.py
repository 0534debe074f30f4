"""
Purpose: Central configuration for driver/load matching.
What it does:

Stores the scoring weights and thresholds of the 100-point model:

VEHICLE_MAX = 25, QUALIFICATION_MAX = 20, LOCATION_MAX = 35,
RATING_MAX = 10, COMPLIANCE_MAX = 10

plus the per-call ranking options (availability/compliance gates, result cap).

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Tuple


@dataclass(frozen=True)
class MatchingPolicy:
    """
    Scoring weights for the matching engine.
    """

    # --- Sub-score maxima (must add up to 100) ---
    vehicle_max: int = 25
    qualification_max: int = 20
    location_max: int = 35
    rating_max: int = 10
    compliance_max: int = 10

    # --- Vehicle ---
    # Awarded when the load states no trailer constraint, or a legacy
    # requirement list did not match the driver's equipment.
    vehicle_partial: int = 15

    # --- Location ---
    # (max miles, points) checked in order; anything farther gets `location_floor`.
    location_tiers: Tuple[Tuple[float, int], ...] = (
        (25, 35),
        (50, 33),
        (100, 30),
        (200, 27),
        (350, 23),
        (500, 18),
        (750, 14),
        (1000, 10),
        (1500, 6),
        (2500, 3),
    )
    location_floor: int = 1
    # Either end could not be placed on the map.
    location_unresolved: int = 10

    # --- Rating ---
    # No rating yet must not be punitive.
    rating_neutral: int = 5

    # --- Compliance ---
    compliance_green: int = 10
    compliance_yellow: int = 5

    # --- Async scoring ---
    # Max candidates resolving coordinates at the same time.
    geocode_concurrency: int = 4

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        total = (
            self.vehicle_max
            + self.qualification_max
            + self.location_max
            + self.rating_max
            + self.compliance_max
        )
        if total != 100:
            raise ValueError(f"sub-score maxima must add up to 100, got {total}")

        if not 0 <= self.vehicle_partial <= self.vehicle_max:
            raise ValueError("vehicle_partial must be within [0, vehicle_max]")

        if not self.location_tiers:
            raise ValueError("location_tiers must not be empty")

        previous_miles, previous_points = -1.0, self.location_max
        for miles, points in self.location_tiers:
            if miles <= previous_miles:
                raise ValueError("location_tiers distances must be strictly increasing")
            if points > previous_points:
                raise ValueError("location_tiers points must be non-increasing")
            previous_miles, previous_points = miles, points

        if not 0 <= self.location_floor <= previous_points:
            raise ValueError("location_floor must be within [0, last tier points]")

        if not 0 <= self.location_unresolved <= self.location_max:
            raise ValueError("location_unresolved must be within [0, location_max]")

        if not 0 <= self.rating_neutral <= self.rating_max:
            raise ValueError("rating_neutral must be within [0, rating_max]")

        if not 0 <= self.compliance_yellow <= self.compliance_green <= self.compliance_max:
            raise ValueError("compliance points must satisfy 0 <= yellow <= green <= max")

        if self.geocode_concurrency < 1:
            raise ValueError("geocode_concurrency must be >= 1")


@dataclass(frozen=True)
class MatchingOptions:
    """
    Per-call knobs for ranking drivers against a load.
    """

    # Drop drivers that are on a trip or off duty.
    only_available: bool = True

    # Drop drivers whose paperwork is not fully current.
    only_green_compliance: bool = True

    # Cap applied after ranking. None or 0 returns everything.
    max_results: Optional[int] = 10

    # Extra eligibility gates supplied by the caller; a candidate must pass all.
    predicates: Sequence[Callable] = field(default_factory=tuple)

    def validate(self) -> None:
        if self.max_results is not None and self.max_results < 0:
            raise ValueError("max_results must be >= 0")


def default_matching_policy() -> MatchingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = MatchingPolicy()
    p.validate()
    return p
