"""Date truncation and range-membership predicates — no UI dependencies."""

from __future__ import annotations

from datetime import date, datetime


def truncate_to_midnight(d: date | datetime) -> datetime:
    """Return local midnight of the calendar day containing *d*.

    Plain dates become naive datetimes.  Aware datetimes are moved to local
    time first and lose their tzinfo.
    """
    if isinstance(d, datetime):
        if d.tzinfo is not None:
            d = d.astimezone().replace(tzinfo=None)
        return d.replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime(d.year, d.month, d.day)


def is_zero_instant(d: date | datetime) -> bool:
    """Return True if *d* is the Unix epoch instant."""
    if not isinstance(d, datetime):
        d = datetime(d.year, d.month, d.day)
    return d.timestamp() == 0


def same_day(a: date | datetime, b: date | datetime) -> bool:
    """Return True if both values fall on the same year, month and day."""
    return a.year == b.year and a.month == b.month and a.day == b.day


def between(
    d: datetime | None,
    lo: datetime | None,
    hi: datetime | None,
    include_min: bool = True,
    include_max: bool = False,
) -> bool:
    """Test *d* against the range [lo, hi) (flags choose the bound types).

    Without *lo* nothing matches.  Without *hi* only an exact hit on an
    included *lo* matches.
    """
    if d is None or lo is None:
        return False
    if hi is None:
        return include_min and d == lo
    above = d > lo or (include_min and d == lo)
    below = d < hi or (include_max and d == hi)
    return above and below
