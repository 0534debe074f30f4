"""
Purpose: Synonym-aware matching of free-text equipment and cargo terms.
What it does:
Answers "do these two terms mean the same kind of equipment?" so that a
driver listing "reefer" is considered for a load asking for "refrigerated".

Matching is substring + synonym table only (no edit distance). It leans
towards recall: a false negative silently hides a valid driver.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, FrozenSet, List, Tuple

# Each row is one equivalence class. Spaced spellings are listed alongside the
# hyphenated ones since neither is a substring of the other.
SYNONYM_CLASSES: Tuple[Tuple[str, ...], ...] = (
    ("reefer", "refrigerated", "cold", "frozen", "temperature-controlled", "temperature controlled"),
    ("flatbed", "open-deck", "open deck"),
    ("dry-van", "dry van", "enclosed", "box"),
    ("tanker", "liquid-bulk", "liquid bulk"),
    ("hopper", "grain", "dry-bulk", "dry bulk"),
    ("lowboy", "heavy-haul", "heavy haul"),
    ("step-deck", "step deck", "drop-deck", "drop deck"),
    ("conestoga", "curtain-side", "curtain side"),
    ("hazmat", "dangerous-goods", "dangerous goods"),
)

# member -> class id, built once
_CLASS_OF: Dict[str, int] = {
    member: class_id
    for class_id, members in enumerate(SYNONYM_CLASSES)
    for member in members
}


def normalize_term(term) -> str:
    return str(term or "").strip().lower()


@lru_cache(maxsize=1024)
def _expand(term: str) -> FrozenSet[str]:
    """
    The term plus every member of each class it belongs to. A term belongs to
    a class if it is a member or contains one ("reefer trailer").
    """
    expanded = {term}
    class_ids = set()
    if term in _CLASS_OF:
        class_ids.add(_CLASS_OF[term])
    for member, class_id in _CLASS_OF.items():
        if member in term:
            class_ids.add(class_id)
    for class_id in class_ids:
        expanded.update(SYNONYM_CLASSES[class_id])
    return frozenset(expanded)


def expand_term(term: str) -> List[str]:
    """Sorted synonym expansion of a single term."""
    text = normalize_term(term)
    if not text:
        return []
    return sorted(_expand(text))


def terms_match(a: str, b: str) -> bool:
    """
    True if `a` and `b` name the same equipment/cargo family.

    Symmetric: terms_match(a, b) == terms_match(b, a). Blank terms never match.
    """
    left, right = normalize_term(a), normalize_term(b)
    if not left or not right:
        return False

    if left in right or right in left:
        return True

    for x in _expand(left):
        for y in _expand(right):
            if x in y or y in x:
                return True
    return False


def any_terms_match(candidates, requirements) -> bool:
    """True if any candidate term matches any requirement."""
    return any(terms_match(c, r) for c in candidates for r in requirements)
