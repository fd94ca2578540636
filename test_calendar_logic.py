"""Tests for month descriptors and the week-grid builder."""

import calendar
from datetime import date, datetime, timedelta

import pytest

from calendar_logic import (
    MonthCellDescriptor,
    MonthDescriptor,
    add_months,
    build_month_cells,
    iso_week_numbers,
    month_label,
    next_month,
    static_month_cells,
    weekday_headers,
)

TODAY = datetime(2013, 1, 15)


def _build(year, month, **kwargs):
    descriptor = MonthDescriptor(month, year, month_label(year, month))
    args = dict(sel_start=None, sel_end=None, domain_min=None, domain_max=None, today=TODAY)
    args.update(kwargs)
    return build_month_cells(descriptor, **args)


def _current(weeks):
    return [c for row in weeks for c in row if c.is_current_month]


class TestWeekPartition:
    def test_january_2013_wraps_into_previous_year(self):
        weeks = _build(2013, 0)
        assert weeks[0][0].date == datetime(2012, 12, 30)
        assert [c.value for c in weeks[0]] == [30, 31, 1, 2, 3, 4, 5]
        assert len(weeks) == 5

    def test_last_row_spills_into_next_month(self):
        weeks = _build(2013, 0)
        last = weeks[-1]
        assert [c.date.day for c in last] == [27, 28, 29, 30, 31, 1, 2]
        assert [c.is_current_month for c in last] == [True] * 5 + [False] * 2

    def test_month_starting_on_sunday_has_no_leading_fill(self):
        weeks = _build(2013, 8)  # September 2013 starts on a Sunday
        assert weeks[0][0].date == datetime(2013, 9, 1)
        assert all(c.is_current_month for c in weeks[0])

    def test_four_row_month(self):
        weeks = _build(2015, 1)  # February 2015: Sunday the 1st, 28 days
        assert len(weeks) == 4
        assert all(c.is_current_month for row in weeks for c in row)

    def test_six_row_month(self):
        weeks = _build(2013, 2)  # March 2013 starts on a Friday
        assert len(weeks) == 6
        assert weeks[-1][0].date == datetime(2013, 3, 31)

    def test_december_stops_at_year_end(self):
        weeks = _build(2013, 11)
        assert weeks[-1][-1].date == datetime(2014, 1, 4)
        assert len(_current(weeks)) == 31

    @pytest.mark.parametrize("year", [2012, 2013, 2016, 2024])
    def test_every_month_is_complete_and_contiguous(self, year):
        for month in range(12):
            weeks = _build(year, month)
            assert 4 <= len(weeks) <= 6
            assert all(len(row) == 7 for row in weeks)
            cells = [c for row in weeks for c in row]
            assert all(b.date - a.date == timedelta(days=1) for a, b in zip(cells, cells[1:]))
            assert len(_current(weeks)) == calendar.monthrange(year, month + 1)[1]

    def test_monday_week_start(self):
        weeks = _build(2013, 0, first_weekday=calendar.MONDAY)
        assert weeks[0][0].date == datetime(2012, 12, 31)
        assert all(row[0].date.weekday() == calendar.MONDAY for row in weeks)


class TestCellFlags:
    def test_fill_cells_are_inert(self):
        weeks = _build(2013, 0,
                       sel_start=datetime(2012, 12, 1), sel_end=datetime(2013, 2, 28),
                       domain_min=datetime(2012, 12, 1), domain_max=datetime(2013, 3, 1),
                       today=datetime(2013, 2, 1))
        for cell in (c for row in weeks for c in row if not c.is_current_month):
            assert (cell.is_selectable, cell.is_selected, cell.is_today) == (False, False, False)

    def test_selectable_is_half_open(self):
        weeks = _build(2013, 0, domain_min=datetime(2013, 1, 10),
                       domain_max=datetime(2013, 1, 20))
        selectable = [c.value for c in _current(weeks) if c.is_selectable]
        assert selectable == list(range(10, 20))

    def test_selection_is_inclusive_and_collected(self):
        collected = []
        weeks = _build(2013, 0, sel_start=datetime(2013, 1, 5), sel_end=datetime(2013, 1, 10),
                       selected_cells=collected)
        assert [c.value for c in _current(weeks) if c.is_selected] == list(range(5, 11))
        assert [c.value for c in collected] == list(range(5, 11))

    def test_single_day_selection_without_end(self):
        weeks = _build(2013, 0, sel_start=datetime(2013, 1, 5))
        assert [c.value for c in _current(weeks) if c.is_selected] == [5]

    def test_today_flag(self):
        weeks = _build(2013, 0)
        assert [c.value for c in _current(weeks) if c.is_today] == [15]

    def test_custom_cell_factory(self):
        made = []

        def factory(*args):
            made.append(args)
            return MonthCellDescriptor(*args)

        weeks = _build(2013, 0, make_cell=factory)
        assert len(made) == sum(len(row) for row in weeks)


def test_static_month_has_nothing_interactive():
    weeks = static_month_cells(2013, 0)
    assert len(weeks) == 5
    assert not any(c.is_selectable or c.is_selected or c.is_today
                   for row in weeks for c in row)


def test_month_descriptor():
    month = MonthDescriptor(0, 2013, month_label(2013, 0))
    assert month.label == "January 2013"
    assert month.calendar_month == 1
    assert month_label(2013, 10, "%m/%Y") == "11/2013"


def test_weekday_headers():
    assert weekday_headers() == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert weekday_headers(calendar.MONDAY)[0] == "Mon"


def test_iso_week_numbers():
    weeks = _build(2013, 0)
    assert iso_week_numbers(weeks) == ["1", "2", "3", "4", "5"]


def test_month_stepping():
    assert next_month(2012, 11) == (2013, 0)
    assert next_month(2013, 4) == (2013, 5)


def test_add_months_clamps_day():
    assert add_months(date(2013, 1, 31), 1) == date(2013, 2, 28)
    assert add_months(date(2012, 11, 16), 12) == date(2013, 11, 16)
    assert add_months(date(2013, 12, 5), 1) == date(2014, 1, 5)
