"""Text rendering for month grids and holiday listings."""

import json
from datetime import date
from enum import Enum
from typing import Callable, Mapping

from .calendar import WEEKDAYS, DayCell, DayStyle, DisplayMonth
from .holidays import HolidayEntry, sorted_holidays

MONTH_WIDTH = 20  # 7 two-character cells and 6 separators
MONTHS_PER_ROW = 3
COLUMN_GAP = "   "
NO_HOLIDAYS = "No holidays found"


class DisplayMode(Enum):
    """Which months the calendar view shows."""

    QUARTER = "q"  # Previous, current and next month
    MONTH = "month"
    YEAR = "year"


# Wraps the padded text of one day cell; must not change its visible width
CellStyler = Callable[[str, DayStyle], str]


def plain(text: str, style: DayStyle) -> str:
    return text


def months_for_mode(
    mode: DisplayMode,
    today: date,
    holidays: Mapping[tuple[int, int], HolidayEntry],
) -> list[DisplayMonth]:
    """Months shown for a display mode, in calendar order."""
    current = DisplayMonth.create(today.month, today.year, holidays)
    match mode:
        case DisplayMode.MONTH:
            return [current]
        case DisplayMode.QUARTER:
            return [current.prev(), current, current.next()]
        case DisplayMode.YEAR:
            return [DisplayMonth.create(m, today.year, holidays) for m in range(1, 13)]
    raise ValueError(f"Unknown display mode: {mode!r}")


def _format_cell(cell: DayCell | None, styler: CellStyler) -> str:
    if cell is None:
        return "  "
    return styler(f"{cell.day:2}", cell.style)


def render_month(month: DisplayMonth, today: date, styler: CellStyler = plain) -> list[str]:
    """
    Render one month as lines of exactly MONTH_WIDTH visible characters.

    The styler is applied per cell after padding, so ANSI codes never shift
    the columns.
    """
    lines = [month.title.center(MONTH_WIDTH), " ".join(WEEKDAYS)]
    for week in month.weekday_layout(today):
        cells = [_format_cell(c, styler) for c in week]
        cells.extend(["  "] * (7 - len(week)))
        lines.append(" ".join(cells))
    return lines


def concat_months(blocks: list[list[str]]) -> str:
    """Place month blocks side by side, padding shorter ones with blank lines."""
    height = max(len(block) for block in blocks)
    padded = [block + [" " * MONTH_WIDTH] * (height - len(block)) for block in blocks]
    rows = [COLUMN_GAP.join(parts).rstrip() for parts in zip(*padded)]
    return "\n".join(rows)


def render_calendar(
    months: list[DisplayMonth], today: date, styler: CellStyler = plain
) -> str:
    """Render months in rows of at most three."""
    blocks = [render_month(m, today, styler) for m in months]
    rows = [
        concat_months(blocks[i : i + MONTHS_PER_ROW])
        for i in range(0, len(blocks), MONTHS_PER_ROW)
    ]
    return "\n\n".join(rows)


# ============== Holiday listings ==============


def format_holiday_line(year: int, day: int, month: int, entry: HolidayEntry) -> str:
    return f"{year}-{month:02d}-{day:02d}  {entry.name} [{entry.kind.value}]"


def format_text(year: int, holidays: Mapping[tuple[int, int], HolidayEntry]) -> str:
    """One line per holiday, or a notice when there are none."""
    if not holidays:
        return NO_HOLIDAYS
    return "\n".join(
        format_holiday_line(year, day, month, entry)
        for day, month, entry in sorted_holidays(holidays)
    )


def format_json(year: int, holidays: Mapping[tuple[int, int], HolidayEntry]) -> str:
    return json.dumps(
        [
            {
                "date": f"{year}-{month:02d}-{day:02d}",
                "day": day,
                "month": month,
                "name": entry.name,
                "kind": entry.kind.value,
            }
            for day, month, entry in sorted_holidays(holidays)
        ],
        indent=2,
        ensure_ascii=False,
    )


def format_markdown(year: int, holidays: Mapping[tuple[int, int], HolidayEntry]) -> str:
    """Fixed-width Markdown table with Date, Name and Kind columns."""
    if not holidays:
        return NO_HOLIDAYS

    header = ("Date", "Name", "Kind")
    rows = [
        (f"{year}-{month:02d}-{day:02d}", entry.name, entry.kind.value)
        for day, month, entry in sorted_holidays(holidays)
    ]
    widths = [max(len(r[i]) for r in [header, *rows]) for i in range(3)]

    def line(cols) -> str:
        return "| " + " | ".join(c.ljust(w) for c, w in zip(cols, widths)) + " |"

    separator = "|" + "|".join("-" * (w + 2) for w in widths) + "|"
    return "\n".join([line(header), separator, *(line(r) for r in rows)])


FORMATTERS = {
    "table": format_text,
    "json": format_json,
    "markdown": format_markdown,
}
