"""Command workflows shared by the CLI.

Each function resolves what it needs, runs the cache-first holiday lookup,
and returns the text to print. "today" is always passed in.
"""

import logging
from datetime import date
from types import MappingProxyType

import click

from .adapters.file_cache import FileHolidayStore
from .adapters.holiday_api import HolidayApiAdapter
from .config import Config
from .core.calendar import DayStyle
from .core.holidays import HolidayMap, Provider, add_custom, remove
from .core.render import FORMATTERS, DisplayMode, months_for_mode, render_calendar
from .errors import ConfigError, InvalidDateError
from .ports import HolidaySource, HolidayStore

logger = logging.getLogger(__name__)

DAY_STYLES = {
    DayStyle.TODAY: {"reverse": True},
    DayStyle.WEEKEND: {"fg": "red"},
    DayStyle.HOLIDAY: {"fg": "red", "bold": True},
    DayStyle.PLAIN: {},
}


def terminal_style(text: str, style: DayStyle) -> str:
    """Colour a day cell for the terminal."""
    return click.style(text, **DAY_STYLES[style])


def get_store(config: Config) -> FileHolidayStore:
    """Resolve the cache directory from config."""
    return FileHolidayStore(config.cache_path)


def get_source(config: Config) -> HolidayApiAdapter:
    return HolidayApiAdapter(timeout=config.http_timeout)


def get_holidays(
    year: int,
    provider: Provider,
    store: HolidayStore,
    source: HolidaySource,
) -> HolidayMap:
    """
    Cache-first lookup of a year's holidays.

    A missing cache is filled from the provider and saved. Cache and fetch
    errors propagate; nothing stale is substituted.
    """
    path = store.filename(year, provider)
    holidays = store.load(path)
    if holidays is not None:
        logger.info(f"Cache hit: {path}")
        return holidays

    holidays = source.fetch(year, provider)
    store.save(path, holidays)
    return holidays


def _check_day_month(day: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidDateError(f"month must be between 1 and 12, got {month}")
    if not 1 <= day <= 31:
        raise InvalidDateError(f"day must be between 1 and 31, got {day}")


def show_calendar(
    config: Config,
    provider: Provider,
    mode: DisplayMode,
    today: date,
    store: HolidayStore | None = None,
    source: HolidaySource | None = None,
) -> str:
    """Render the calendar view for mode around today."""
    store = store or get_store(config)
    source = source or get_source(config)
    holidays = get_holidays(today.year, provider, store, source)
    months = months_for_mode(mode, today, MappingProxyType(holidays))
    return render_calendar(months, today, terminal_style)


def show_holidays(
    config: Config,
    provider: Provider,
    fmt: str,
    today: date,
    store: HolidayStore | None = None,
    source: HolidaySource | None = None,
) -> str:
    """List this year's holidays in the requested format."""
    formatter = FORMATTERS.get(fmt)
    if formatter is None:
        raise ConfigError(f"unknown list format: {fmt!r}")
    store = store or get_store(config)
    source = source or get_source(config)
    holidays = get_holidays(today.year, provider, store, source)
    return formatter(today.year, holidays)


def add_custom_holiday(
    config: Config,
    provider: Provider,
    day: int,
    month: int,
    today: date,
    store: HolidayStore | None = None,
    source: HolidaySource | None = None,
) -> str:
    """Mark (day, month) of this year as a custom holiday."""
    _check_day_month(day, month)
    store = store or get_store(config)
    source = source or get_source(config)
    holidays = get_holidays(today.year, provider, store, source)
    if not add_custom(holidays, day, month):
        logger.info(f"{day:02d}/{month:02d} already has a holiday, keeping it")
    store.save(store.filename(today.year, provider), holidays)
    return "OK"


def delete_holiday(
    config: Config,
    provider: Provider,
    day: int,
    month: int,
    today: date,
    store: HolidayStore | None = None,
    source: HolidaySource | None = None,
) -> str:
    """Remove whatever holiday (day, month) of this year has."""
    _check_day_month(day, month)
    store = store or get_store(config)
    source = source or get_source(config)
    holidays = get_holidays(today.year, provider, store, source)
    if not remove(holidays, day, month):
        logger.info(f"No holiday on {day:02d}/{month:02d}")
    store.save(store.filename(today.year, provider), holidays)
    return "OK"
