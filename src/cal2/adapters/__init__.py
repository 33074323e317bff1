"""Adapters - I/O implementations of ports."""

from .file_cache import FileHolidayStore
from .holiday_api import HolidayApiAdapter

__all__ = [
    "FileHolidayStore",
    "HolidayApiAdapter",
]
