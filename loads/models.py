"""
Purpose: Domain models for the Loads capability.
What it does:
- Defines the Load record posted by owner-operators
  (id, origin, destination, cargo, equipment requirements, status, money)
- Defines LoadStatus = Pending | Matched | In-transit | Delivered

Rule: No geocoding, no scoring. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Optional, Tuple


class LoadStatus(str, Enum):
    PENDING = "Pending"
    MATCHED = "Matched"
    IN_TRANSIT = "In-transit"
    DELIVERED = "Delivered"


@dataclass(frozen=True)
class Load:
    """
    Represents a freight job waiting for (or assigned to) a driver.

    `required_qualifications` is the legacy free-text list; it may mix trailer
    requirements ("reefer") with certifications ("hazmat").
    """

    id: str
    origin: str = ""
    destination: str = ""
    cargo: str = ""
    weight: float = 0.0
    price: Optional[float] = None
    status: LoadStatus = LoadStatus.PENDING

    trailer_type: Optional[str] = None
    required_qualifications: Tuple[str, ...] = ()

    owner_id: Optional[str] = None
    pickup_date: Optional[date] = None

    @staticmethod
    def new(
        load_id: str,
        origin: str = "",
        destination: str = "",
        *,
        status: str | LoadStatus = LoadStatus.PENDING,
        trailer_type: Optional[str] = None,
        required_qualifications: Optional[Iterable[str]] = None,
        **details,
    ) -> Load:
        if isinstance(status, str):
            status = LoadStatus(status)

        return Load(
            id=load_id,
            origin=origin or "",
            destination=destination or "",
            status=status,
            trailer_type=trailer_type or None,
            required_qualifications=tuple(q for q in (required_qualifications or ()) if q),
            **details,
        )
