"""Functional core - pure business logic with no I/O."""

from .holidays import (
    HolidayKind,
    HolidayEntry,
    HolidayMap,
    Provider,
    ArgentinaDatos,
    OpenHolidays,
    resolve_provider,
    provider_slug,
    add_custom,
    remove,
)
from .calendar import DisplayMonth, DayCell, DayStyle
from .render import DisplayMode, months_for_mode, render_calendar

__all__ = [
    # Holidays
    "HolidayKind",
    "HolidayEntry",
    "HolidayMap",
    "Provider",
    "ArgentinaDatos",
    "OpenHolidays",
    "resolve_provider",
    "provider_slug",
    "add_custom",
    "remove",
    # Calendar
    "DisplayMonth",
    "DayCell",
    "DayStyle",
    # Rendering
    "DisplayMode",
    "months_for_mode",
    "render_calendar",
]
