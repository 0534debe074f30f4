"""
Purpose: Regulatory-document currency check for drivers.
What it does:
Classifies a driver as Green (everything current), Yellow (something lapses
within the warning window) or Red (missing or lapsed paperwork).

The matching engine only consumes the status; any callable with the same
shape can be injected in place of `classify_driver`.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Callable, Optional

from drivers.models import Driver

# Days before expiry that flip a document to Yellow.
EXPIRY_WARNING_DAYS = 30
# Background checks and drug screens are good for one year.
SCREENING_VALIDITY_YEARS = 1


class ComplianceStatus(str, Enum):
    GREEN = "Green"
    YELLOW = "Yellow"
    RED = "Red"


ComplianceClassifier = Callable[[Driver], Optional[ComplianceStatus]]


def _add_years(start: date, years: int) -> date:
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        # Feb 29 -> Feb 28
        return start.replace(year=start.year + years, day=28)


def _window_status(lapses_on: date, today: date) -> Optional[ComplianceStatus]:
    days_left = (lapses_on - today).days
    if days_left < 0:
        return ComplianceStatus.RED
    if days_left <= EXPIRY_WARNING_DAYS:
        return ComplianceStatus.YELLOW
    return None


def classify_driver(driver: Driver, today: Optional[date] = None) -> ComplianceStatus:
    """
    Green/Yellow/Red status of a driver's documents.

    Checks run in a fixed order and the first non-green finding wins:
    missing fields, then CDL / medical card / insurance expiry, then
    background check / drug screen age. Pre-employment screening never expires
    but must exist.
    """
    today = today or date.today()

    required = (
        driver.cdl_license,
        driver.cdl_expiry,
        driver.medical_card_expiry,
        driver.insurance_expiry,
        driver.motor_vehicle_record_number,
        driver.background_check_date,
        driver.pre_employment_screening_date,
        driver.drug_and_alcohol_screening_date,
    )
    if any(not value for value in required):
        return ComplianceStatus.RED

    for expiry in (driver.cdl_expiry, driver.medical_card_expiry, driver.insurance_expiry):
        status = _window_status(expiry, today)
        if status is not None:
            return status

    for screened_on in (driver.background_check_date, driver.drug_and_alcohol_screening_date):
        status = _window_status(_add_years(screened_on, SCREENING_VALIDITY_YEARS), today)
        if status is not None:
            return status

    return ComplianceStatus.GREEN
