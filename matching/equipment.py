#Purpose: Hard equipment gate (rule filter, not a score).
#Decides whether a driver's trailers can physically carry a load.
#A driver failing this gate is never ranked, whatever else it scores.
#Policy, in priority order:
#1. load.trailer_type set -> some driver capability must match it
#2. legacy required_qualifications contain trailer keywords -> some capability must match one
#3. nothing equipment-related stated -> compatible

from __future__ import annotations

from typing import List

from drivers.models import Driver
from loads.models import Load

from .terms import any_terms_match, normalize_term, terms_match

# Entries of required_qualifications containing one of these are trailer
# requirements; everything else is a certification.
TRAILER_KEYWORDS = ("van", "reefer", "flatbed", "tanker", "hopper", "deck", "refrigerated", "lowboy")


def is_trailer_requirement(requirement: str) -> bool:
    text = normalize_term(requirement)
    return any(keyword in text for keyword in TRAILER_KEYWORDS)


def trailer_requirements(load: Load) -> List[str]:
    return [q for q in load.required_qualifications if is_trailer_requirement(q)]


def certification_requirements(load: Load) -> List[str]:
    return [q for q in load.required_qualifications if q and not is_trailer_requirement(q)]


def get_driver_trailer_types(driver: Driver) -> List[str]:
    return driver.capabilities()


def is_equipment_compatible(driver: Driver, load: Load) -> bool:
    capabilities = get_driver_trailer_types(driver)

    if normalize_term(load.trailer_type):
        return any(terms_match(capability, load.trailer_type) for capability in capabilities)

    required = trailer_requirements(load)
    if required:
        return any_terms_match(capabilities, required)

    return True
