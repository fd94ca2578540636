"""Shared fixtures for the range picker tests."""

from datetime import datetime

import pytest

from calendar_model import CalendarModel
from range_selector import RangeListener

TODAY = datetime(2013, 1, 15, 9, 30)


class RecordingListener(RangeListener):
    def __init__(self):
        self.events: list[str] = []

    def on_range_started(self):
        self.events.append("started")

    def on_range_completed(self):
        self.events.append("completed")


@pytest.fixture
def model():
    """A model whose clock is pinned to 2013-01-15."""
    return CalendarModel(clock=lambda: TODAY)


@pytest.fixture
def winter_model(model):
    """January and February 2013 selectable, data-changed calls counted."""
    model.init_domain(datetime(2013, 1, 1), datetime(2013, 3, 1))
    model.data_changed_calls = 0

    def _count():
        model.data_changed_calls += 1

    model.add_data_changed_callback(_count)
    return model


@pytest.fixture
def listener(winter_model):
    recorder = RecordingListener()
    winter_model.set_listener(recorder)
    return recorder
