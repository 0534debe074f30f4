"""
Purpose: Core data models for the drivers domain.
What it does:
Defines the read-only Driver record the matching engine consumes, the
availability states a driver can be in, and the one place that decides which
trailer capabilities a driver offers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional, Tuple


class Availability(str, Enum):
    """
    Standardizes whether a driver can be offered a load right now.
    """
    AVAILABLE = "Available"
    ON_TRIP = "On-trip"
    OFF_DUTY = "Off-duty"


def _as_date(value) -> Optional[date]:
    # ISO strings come straight from the document store
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(frozen=True)
class Driver:
    """
    A purely stateless snapshot of a Driver profile.
    Owned by fleet management; the matching engine never mutates it.
    """
    id: str
    location: str = ""
    name: str = ""

    # Equipment. `trailer_types` supersedes the legacy single `vehicle_type`.
    trailer_types: Optional[Tuple[str, ...]] = None
    vehicle_type: Optional[str] = None

    certifications: Tuple[str, ...] = ()
    rating: Optional[float] = None
    availability: Availability = Availability.AVAILABLE
    is_active: bool = True
    owner_id: Optional[str] = None

    # Compliance documents
    cdl_license: Optional[str] = None
    cdl_expiry: Optional[date] = None
    medical_card_expiry: Optional[date] = None
    insurance_expiry: Optional[date] = None
    motor_vehicle_record_number: Optional[str] = None
    background_check_date: Optional[date] = None
    pre_employment_screening_date: Optional[date] = None
    drug_and_alcohol_screening_date: Optional[date] = None

    def capabilities(self) -> List[str]:
        """
        Trailer types this driver can haul.

        The plural list wins whenever it is present (even if empty), otherwise
        the legacy singular field, otherwise nothing.
        """
        if self.trailer_types is not None:
            return [t for t in self.trailer_types if t]
        if self.vehicle_type:
            return [self.vehicle_type]
        return []

    @classmethod
    def new(
        cls,
        driver_id: str,
        location: str = "",
        *,
        trailer_types: Optional[Iterable[str]] = None,
        vehicle_type: Optional[str] = None,
        certifications: Optional[Iterable[str]] = None,
        rating: Optional[float] = None,
        availability: str | Availability = Availability.AVAILABLE,
        is_active: bool = True,
        **documents,
    ) -> Driver:
        if isinstance(availability, str):
            availability = Availability(availability)

        for field_name in (
            "cdl_expiry",
            "medical_card_expiry",
            "insurance_expiry",
            "background_check_date",
            "pre_employment_screening_date",
            "drug_and_alcohol_screening_date",
        ):
            if field_name in documents:
                documents[field_name] = _as_date(documents[field_name])

        return cls(
            id=driver_id,
            location=location or "",
            trailer_types=tuple(trailer_types) if trailer_types is not None else None,
            vehicle_type=vehicle_type,
            certifications=tuple(certifications or ()),
            rating=float(rating) if rating is not None else None,
            availability=availability,
            is_active=is_active,
            **documents,
        )
