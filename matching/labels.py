"""
Human-facing helpers for rendering a match without re-deriving any scoring:
a quality label for the total and up to two badges for the strongest factors.
"""

from __future__ import annotations

from typing import List

from .scoring import MatchScoreBreakdown

# (minimum total, label) checked top-down
QUALITY_LABELS = (
    (80, "Excellent Match"),
    (60, "Good Match"),
    (40, "Fair Match"),
)
FALLBACK_LABEL = "Possible Match"

MAX_REASONS = 2


def get_match_quality_label(score: int) -> str:
    for threshold, label in QUALITY_LABELS:
        if score >= threshold:
            return label
    return FALLBACK_LABEL


def get_match_reasons(breakdown: MatchScoreBreakdown) -> List[str]:
    """
    The strongest contributing factors, in fixed priority order, at most two.
    """
    reasons = []
    if breakdown.location_score >= 27:
        reasons.append("Close to pickup")
    if breakdown.vehicle_match == 25:
        reasons.append("Equipment match")
    if breakdown.rating_score >= 9:
        reasons.append("Top rated")
    if breakdown.qualification_match == 20:
        reasons.append("Fully qualified")
    if breakdown.compliance_score == 10:
        reasons.append("Fully compliant")
    return reasons[:MAX_REASONS]
