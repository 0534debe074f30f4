"""
Loads domain package.

Public API:
- Domain models: Load, LoadStatus
"""
from .models import Load, LoadStatus

__all__ = ["Load",
           "LoadStatus",
           ]
