#Expose the matching pipeline pieces:
#Term synonyms + equipment gate (hard rules)
#Scoring (100-point breakdown)
#Ranking (the "one call" entry points)
#Display helpers

from .equipment import get_driver_trailer_types, is_equipment_compatible
from .labels import get_match_quality_label, get_match_reasons
from .policy import MatchingOptions, MatchingPolicy, default_matching_policy
from .ranking import (
    LoadMatchScore,
    MatchScore,
    find_matching_drivers,
    find_matching_drivers_async,
    find_matching_loads,
    find_matching_loads_async,
)
from .scoring import (
    MatchScoreBreakdown,
    calculate_match_score,
    calculate_match_score_async,
    get_total_score,
)
from .terms import terms_match

__all__ = [
    "terms_match",
    "is_equipment_compatible",
    "get_driver_trailer_types",
    "MatchingOptions",
    "MatchingPolicy",
    "default_matching_policy",
    "MatchScoreBreakdown",
    "calculate_match_score",
    "calculate_match_score_async",
    "get_total_score",
    "MatchScore",
    "LoadMatchScore",
    "find_matching_drivers",
    "find_matching_drivers_async",
    "find_matching_loads",
    "find_matching_loads_async",
    "get_match_quality_label",
    "get_match_reasons",
]
