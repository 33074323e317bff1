"""Ports - interfaces/protocols for external dependencies."""

from .holiday_store import HolidayStore
from .holiday_source import HolidaySource

__all__ = [
    "HolidayStore",
    "HolidaySource",
]
