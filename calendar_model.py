"""Calendar model: months, their week grids, the domain and the selected range."""

from __future__ import annotations

import logging
import time
from datetime import date, datetime, timedelta
from typing import Callable

from calendar_logic import (
    SUNDAY,
    MonthCellDescriptor,
    MonthDescriptor,
    WeekMatrix,
    build_month_cells,
    month_label,
    next_month,
)
from date_util import between, is_zero_instant, truncate_to_midnight
from errors import IllegalState, InvalidRange
from range_selector import RangeListener, RangeSelector, SelectionState

logger = logging.getLogger(__name__)


class CalendarModel:
    """A list of months between two dates, with one selectable date range.

    Call :meth:`initialize` before reading :attr:`months` / :attr:`cells`.
    Time of day is ignored everywhere.  For instance, with ``domain_min``
    2012-11-16 17:15 and ``domain_max`` 2013-11-16 04:30, 2012-11-16 is the
    first selectable date and 2013-11-15 the last (``domain_max`` is exclusive).
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        first_weekday: int = SUNDAY,
        month_label_format: str = "%B %Y",
    ) -> None:
        self._clock = clock
        self.first_weekday = first_weekday
        self.month_label_format = month_label_format

        self.months: list[MonthDescriptor] = []
        self.cells: list[WeekMatrix] = []
        self.selected_cells: list[MonthCellDescriptor] = []
        self.today: datetime = truncate_to_midnight(clock())

        self.domain_min: datetime | None = None
        self.domain_max: datetime | None = None
        self._selected_start: datetime | None = None
        self._selected_end: datetime | None = None

        self.listener: RangeListener | None = None
        self._data_changed_callbacks: list[Callable[[], None]] = []
        self._selector = RangeSelector(self)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def init_domain(self, domain_min: date | datetime,
                    domain_max: date | datetime) -> None:
        self.initialize(domain_min, domain_max)

    def initialize(
        self,
        domain_min: date | datetime | None,
        domain_max: date | datetime | None,
        selected_start: date | datetime | None = None,
        selected_end: date | datetime | None = None,
    ) -> None:
        """Rebuild every month in [domain_min, domain_max) with an optional selection.

        Both bounds must be given, must not be the zero instant, and
        ``domain_min`` must fall on an earlier day than ``domain_max``.
        Selection endpoints are inclusive and must lie inside the domain.
        Nothing changes if validation fails.
        """
        if domain_min is None or domain_max is None:
            raise self._invalid("Min/max dates must be non-null")
        if is_zero_instant(domain_min) or is_zero_instant(domain_max):
            raise self._invalid("Min/max dates must be non-zero")

        lo = truncate_to_midnight(domain_min)
        hi = truncate_to_midnight(domain_max)
        if not lo < hi:
            raise self._invalid("Min date must be before max date")
        # Exclusive bound: step back so a max on the 1st doesn't pull in that month.
        hi -= timedelta(minutes=1)

        start = truncate_to_midnight(selected_start) if selected_start is not None else None
        end = truncate_to_midnight(selected_end) if selected_end is not None else None
        self._check_range(start, end, lo, hi)

        started = time.perf_counter()
        today = truncate_to_midnight(self._clock())
        months: list[MonthDescriptor] = []
        cells: list[WeekMatrix] = []
        selected_cells: list[MonthCellDescriptor] = []
        year, month = lo.year, lo.month - 1
        while (year, month) <= (hi.year, hi.month - 1) and year < hi.year + 1:
            descriptor = MonthDescriptor(
                month, year, month_label(year, month, self.month_label_format))
            cells.append(build_month_cells(
                descriptor, start, end, lo, hi, today,
                selected_cells=selected_cells,
                first_weekday=self.first_weekday,
                make_cell=self.create_descriptor,
            ))
            logger.debug("Adding month %s", descriptor)
            months.append(descriptor)
            year, month = next_month(year, month)

        self.months, self.cells, self.selected_cells = months, cells, selected_cells
        self.domain_min, self.domain_max = lo, hi
        self.today = today
        self.store_selection(start, end)
        logger.debug("Built %d months in %.1f ms", len(months),
                     (time.perf_counter() - started) * 1000)
        self.notify_data_changed()

    def create_descriptor(self, cell_date: datetime, current_month: bool,
                          selectable: bool, selected: bool, today: bool,
                          value: int) -> MonthCellDescriptor:
        return MonthCellDescriptor(cell_date, current_month, selectable,
                                   selected, today, value)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    @staticmethod
    def _invalid(message: str) -> InvalidRange:
        logger.warning("Rejected range: %s", message)
        return InvalidRange(message)

    def _check_range(self, start: datetime | None, end: datetime | None,
                     lo: datetime | None, hi: datetime | None) -> None:
        if start is None and end is not None:
            raise self._invalid("No end date without a start date")
        if start is not None and not between(start, lo, hi):
            raise self._invalid(f"Start date {start:%Y-%m-%d} out of range")
        if end is not None and not between(end, lo, hi):
            raise self._invalid(f"End date {end:%Y-%m-%d} out of range")
        if end is not None and start > end:
            raise self._invalid("Start date must be before end date")

    def validate_range(self, start: datetime | None, end: datetime | None) -> None:
        """Raise InvalidRange unless [start, end] fits the current domain."""
        self._check_range(start, end, self.domain_min, self.domain_max)

    def is_selectable(self, d: date | datetime) -> bool:
        return between(truncate_to_midnight(d), self.domain_min, self.domain_max)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    @property
    def selected_start(self) -> datetime | None:
        return self._selected_start

    @property
    def selected_end(self) -> datetime | None:
        return self._selected_end

    @property
    def selection_state(self) -> SelectionState:
        if self._selected_start is None:
            return SelectionState.EMPTY
        if self._selected_end is None:
            return SelectionState.PARTIAL_RANGE
        return SelectionState.COMPLETE_RANGE

    def store_selection(self, start: datetime | None, end: datetime | None) -> None:
        self._selected_start = start
        self._selected_end = end

    def notify_cell_clicked(self, d: date | datetime) -> None:
        """Entry point for the rendering surface when a day cell is clicked."""
        self._selector.handle_click(d)

    def select_range(self, start: date | datetime | None,
                     end: date | datetime | None = None) -> None:
        self._selector.select_range(start, end)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def set_listener(self, listener: RangeListener | None) -> None:
        self.listener = listener

    def add_data_changed_callback(self, callback: Callable[[], None]) -> None:
        self._data_changed_callbacks.append(callback)

    def notify_data_changed(self) -> None:
        for callback in self._data_changed_callbacks:
            callback()

    # ------------------------------------------------------------------
    # Read access for the rendering surface
    # ------------------------------------------------------------------
    def month_grids(self) -> list[tuple[MonthDescriptor, WeekMatrix]]:
        if not self.months:
            raise IllegalState(
                "Must have at least one month to display.  Did you forget to call initialize()?")
        return list(zip(self.months, self.cells))
