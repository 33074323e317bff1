"""Pure holiday domain logic - no I/O dependencies."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from cal2.errors import ConfigError

DEFAULT_HOLIDAY_NAME = "Public holiday"


class HolidayKind(Enum):
    """Where a holiday entry came from."""

    OFFICIAL = "official"  # Fetched from a provider
    CUSTOM = "custom"  # Added by the user


@dataclass(frozen=True)
class HolidayEntry:
    """A single holiday on a given day."""

    name: str
    kind: HolidayKind

    @classmethod
    def official(cls, name: str) -> "HolidayEntry":
        return cls(name=name, kind=HolidayKind.OFFICIAL)

    @classmethod
    def custom(cls, name: str) -> "HolidayEntry":
        return cls(name=name, kind=HolidayKind.CUSTOM)


# (day, month) -> entry, for exactly one year
HolidayMap = dict[tuple[int, int], HolidayEntry]


@dataclass(frozen=True)
class ArgentinaDatos:
    """The default provider, api.argentinadatos.com."""


@dataclass(frozen=True)
class OpenHolidays:
    """openholidaysapi.org, for any other country."""

    country_code: str


Provider = ArgentinaDatos | OpenHolidays


def resolve_provider(country: str | None) -> Provider:
    """
    Turn an optional --country value into a Provider.

    Pure function - no I/O. Rejects malformed codes before anything touches
    the network or the cache.
    """
    if country is None:
        return ArgentinaDatos()

    trimmed = country.strip()
    if not trimmed:
        raise ConfigError("--country cannot be empty")

    upper = trimmed.upper()
    if not 2 <= len(upper) <= 3:
        raise ConfigError("--country must be a 2- or 3-letter ISO code")

    if not (upper.isascii() and upper.isalpha()):
        raise ConfigError("--country must contain only ASCII letters")

    if upper == "AR":
        return ArgentinaDatos()
    return OpenHolidays(country_code=upper)


def is_default_provider(provider: Provider) -> bool:
    return isinstance(provider, ArgentinaDatos)


def provider_slug(provider: Provider) -> str:
    """Short name used in cache filenames."""
    match provider:
        case ArgentinaDatos():
            return "argentina-datos"
        case OpenHolidays(country_code=code):
            return f"openholidays-{code.lower()}"
    raise TypeError(f"Unknown provider: {provider!r}")


def parse_date(value: str) -> tuple[int, int] | None:
    """
    Parse a provider date "YYYY-MM-DD" into (day, month).

    The year segment is discarded. Returns None if the string does not have
    exactly three integer segments. Month and day ranges are not checked.
    """
    parts = value.split("-")
    if len(parts) != 3:
        return None
    try:
        _year, month, day = (int(p) for p in parts)
    except ValueError:
        return None
    return day, month


def choose_name(names: list[dict]) -> str:
    """Pick the English name from an OpenHolidays name list."""
    for item in names:
        if str(item.get("language", "")).upper() == "EN":
            return item["text"]
    if names:
        return names[0]["text"]
    return DEFAULT_HOLIDAY_NAME


def build_holidays(entries: Iterable[tuple[str, str]]) -> HolidayMap:
    """Build an official HolidayMap from (date string, name) pairs."""
    holidays: HolidayMap = {}
    for date_str, name in entries:
        key = parse_date(date_str)
        if key is None:
            continue
        holidays[key] = HolidayEntry.official(name)
    return holidays


def custom_holiday_name(day: int, month: int) -> str:
    return f"Custom holiday ({day:02d}/{month:02d})"


def add_custom(holidays: HolidayMap, day: int, month: int) -> bool:
    """
    Add a custom holiday unless the day already has one.

    Returns True if an entry was inserted. Existing entries, official or
    custom, are never overwritten.
    """
    if (day, month) in holidays:
        return False
    holidays[(day, month)] = HolidayEntry.custom(custom_holiday_name(day, month))
    return True


def remove(holidays: HolidayMap, day: int, month: int) -> bool:
    """Remove the holiday on (day, month). Returns False if there was none."""
    return holidays.pop((day, month), None) is not None


def sorted_holidays(
    holidays: Mapping[tuple[int, int], HolidayEntry],
) -> list[tuple[int, int, HolidayEntry]]:
    """Return (day, month, entry) triples ordered by month, then day."""
    return sorted(
        ((day, month, entry) for (day, month), entry in holidays.items()),
        key=lambda item: (item[1], item[0]),
    )
