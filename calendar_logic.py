"""Pure calendar calculations — month descriptors and week grids, no UI dependencies."""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable

from date_util import between, same_day

logger = logging.getLogger(__name__)

# Indexed by calendar weekday numbering (Monday == 0).
DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

SUNDAY = calendar.SUNDAY


@dataclass(frozen=True)
class MonthDescriptor:
    """One displayed month.  ``month`` is zero-based (January == 0)."""

    month: int
    year: int
    label: str

    @property
    def calendar_month(self) -> int:
        return self.month + 1

    def __str__(self) -> str:
        return f"MonthDescriptor(label={self.label}, month={self.month}, year={self.year})"


@dataclass
class MonthCellDescriptor:
    """One grid cell.  Only ``is_selected`` changes after construction."""

    date: datetime
    is_current_month: bool
    is_selectable: bool
    is_selected: bool
    is_today: bool
    value: int

    def flags(self) -> tuple[bool, bool, bool, bool]:
        return (self.is_current_month, self.is_selectable,
                self.is_selected, self.is_today)


WeekMatrix = list[list[MonthCellDescriptor]]
CellFactory = Callable[[datetime, bool, bool, bool, bool, int], MonthCellDescriptor]


def weekday_headers(first_weekday: int = SUNDAY) -> list[str]:
    """Return the seven day abbreviations starting at *first_weekday*."""
    return [DAY_ABBR[(first_weekday + i) % 7] for i in range(7)]


def month_label(year: int, month: int, fmt: str = "%B %Y") -> str:
    """Format the label for a zero-based *month*."""
    return date(year, month + 1, 1).strftime(fmt)


def _week_start(year: int, month: int, first_weekday: int) -> datetime:
    """Return the week start on or before the 1st of a zero-based *month*."""
    first = datetime(year, month + 1, 1)
    return first - timedelta(days=(first.weekday() - first_weekday) % 7)


def build_month_cells(
    month: MonthDescriptor,
    sel_start: datetime | None,
    sel_end: datetime | None,
    domain_min: datetime | None,
    domain_max: datetime | None,
    today: datetime,
    selected_cells: list[MonthCellDescriptor] | None = None,
    first_weekday: int = SUNDAY,
    make_cell: CellFactory = MonthCellDescriptor,
) -> WeekMatrix:
    """Return the week-partitioned cells for *month*.

    Rows start on *first_weekday* and keep coming until the cursor passes
    the month, so the last row may spill into the next month.  Selected
    cells are appended to *selected_cells* when it is given.
    """
    cursor = _week_start(month.year, month.month, first_weekday)
    target = (month.year, month.calendar_month)
    weeks: WeekMatrix = []
    while (cursor.year, cursor.month) <= target:
        logger.debug("Building week row starting at %s", cursor)
        row: list[MonthCellDescriptor] = []
        for _ in range(7):
            current = cursor.month == month.calendar_month
            selected = current and between(cursor, sel_start, sel_end, True, True)
            selectable = current and between(cursor, domain_min, domain_max)
            is_today = current and same_day(cursor, today)
            cell = make_cell(cursor, current, selectable, selected, is_today, cursor.day)
            if selected and selected_cells is not None:
                selected_cells.append(cell)
            row.append(cell)
            cursor += timedelta(days=1)
        weeks.append(row)
    return weeks


def static_month_cells(year: int, month: int,
                       first_weekday: int = SUNDAY) -> WeekMatrix:
    """Return a read-only grid for a zero-based *month*: nothing selectable."""
    descriptor = MonthDescriptor(month, year, month_label(year, month))
    return build_month_cells(descriptor, None, None, None, None,
                             today=datetime.min, first_weekday=first_weekday)


def iso_week_numbers(weeks: WeekMatrix) -> list[str]:
    """Return the ISO week number of each row, taken from the row's Monday."""
    numbers: list[str] = []
    for row in weeks:
        monday = next(c for c in row if c.date.weekday() == calendar.MONDAY)
        numbers.append(str(monday.date.isocalendar()[1]))
    return numbers


def day_of_year(d: date) -> int:
    """Return the 1-based day-of-year for the given date."""
    return d.timetuple().tm_yday


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later (zero-based month)."""
    if month == 11:
        return year + 1, 0
    return year, month + 1


def add_months(d: date, n: int) -> date:
    """Shift *d* by *n* months, clamping the day to the target month's length."""
    year, month = divmod(d.year * 12 + d.month - 1 + n, 12)
    last = calendar.monthrange(year, month + 1)[1]
    return d.replace(year=year, month=month + 1, day=min(d.day, last))
