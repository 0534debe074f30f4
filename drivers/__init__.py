"""
Drivers domain package.

Public API:
- Domain models: Driver, Availability
"""
from .models import Driver, Availability

__all__ = ["Driver",
           "Availability",
           ]
