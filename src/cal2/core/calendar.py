"""Pure calendar arithmetic - no I/O dependencies."""

from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from cal2.errors import InvalidDateError

from .holidays import HolidayEntry

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

WEEKDAYS = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]

_EMPTY: Mapping[tuple[int, int], HolidayEntry] = MappingProxyType({})


class DayStyle(Enum):
    """How a day cell is highlighted. Earlier members win."""

    TODAY = "today"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"
    PLAIN = "plain"


@dataclass(frozen=True)
class DayCell:
    """A day of the month with its highlight."""

    day: int
    style: DayStyle


@dataclass(frozen=True)
class DisplayMonth:
    """
    One month of one year, viewed against a holiday map.

    The holiday map is borrowed read-only; a DisplayMonth never owns or
    changes it. Build instances with create(), which validates the input.
    """

    month: int
    year: int
    first_day: date
    last_day: date
    holidays: Mapping[tuple[int, int], HolidayEntry] = field(
        default_factory=lambda: _EMPTY, compare=False, repr=False
    )

    @classmethod
    def create(
        cls,
        month: int,
        year: int,
        holidays: Mapping[tuple[int, int], HolidayEntry] | None = None,
    ) -> "DisplayMonth":
        if not 1 <= month <= 12:
            raise InvalidDateError(f"month must be between 1 and 12, got {month}")
        try:
            first_day = date(year, month, 1)
            last_day = date(year, month, monthrange(year, month)[1])
        except (ValueError, OverflowError) as e:
            raise InvalidDateError(f"{month}/{year}: {e}") from e
        return cls(
            month=month,
            year=year,
            first_day=first_day,
            last_day=last_day,
            holidays=_EMPTY if holidays is None else holidays,
        )

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month - 1]

    @property
    def title(self) -> str:
        return f"{self.month_name} {self.year}"

    def next(self) -> "DisplayMonth":
        """The following month, rolling December into January of next year."""
        next_month = self.month % 12 + 1
        year = self.year + 1 if next_month <= self.month else self.year
        return DisplayMonth.create(next_month, year, self.holidays)

    def prev(self) -> "DisplayMonth":
        """The preceding month, rolling January back into December."""
        if self.month == 1:
            return DisplayMonth.create(12, self.year - 1, self.holidays)
        return DisplayMonth.create(self.month - 1, self.year, self.holidays)

    def classify(self, day: date, today: date) -> DayStyle:
        if day == today:
            return DayStyle.TODAY
        if day.weekday() >= 5:
            return DayStyle.WEEKEND
        if (day.day, self.month) in self.holidays:
            return DayStyle.HOLIDAY
        return DayStyle.PLAIN

    def weekday_layout(self, today: date) -> list[list[DayCell | None]]:
        """
        Lay the month out week by week, Monday first.

        Cells before the 1st are None. The last week is not padded.
        """
        cells: list[DayCell | None] = [None] * self.first_day.weekday()
        for day_number in range(1, self.last_day.day + 1):
            current = self.first_day.replace(day=day_number)
            cells.append(DayCell(day_number, self.classify(current, today)))
        return [cells[i : i + 7] for i in range(0, len(cells), 7)]
