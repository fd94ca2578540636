"""Exceptions raised by the range picker engine."""


class CalendarError(Exception):
    """Base class for range picker errors."""


class InvalidRange(CalendarError, ValueError):
    """A domain bound or selection endpoint is missing, reversed or out of range."""


class IllegalState(CalendarError, RuntimeError):
    """The grid was requested before any month was built."""
