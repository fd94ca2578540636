"""Click-driven range selection over a CalendarModel's cells."""

from __future__ import annotations

import logging
from datetime import date, datetime
from enum import Enum, auto
from typing import TYPE_CHECKING

from date_util import between, truncate_to_midnight

if TYPE_CHECKING:
    from calendar_model import CalendarModel

logger = logging.getLogger(__name__)


class SelectionState(Enum):
    EMPTY = auto()
    PARTIAL_RANGE = auto()
    COMPLETE_RANGE = auto()


class RangeListener:
    """Receives selection lifecycle events.  Override either hook."""

    def on_range_started(self) -> None:
        pass

    def on_range_completed(self) -> None:
        pass


class RangeSelector:
    """Two-click state machine: start a range, complete it, start over."""

    def __init__(self, model: "CalendarModel") -> None:
        self._model = model

    def handle_click(self, clicked: date | datetime) -> None:
        model = self._model
        clicked = truncate_to_midnight(clicked)
        if not model.is_selectable(clicked):
            logger.debug("Ignoring click on unselectable date %s", clicked)
            return

        start = model.selected_start
        # Empty or complete: begin a new range.  Partial: complete it.
        if model.selection_state is not SelectionState.PARTIAL_RANGE:
            self.select_range(clicked, None)
        elif clicked < start:
            self.select_range(clicked, start)
        else:
            self.select_range(start, clicked)

    def select_range(self, start: datetime | None, end: datetime | None) -> None:
        """Select [start, end] (or the single day *start*) and notify observers."""
        model = self._model
        start = truncate_to_midnight(start) if start is not None else None
        end = truncate_to_midnight(end) if end is not None else None
        model.validate_range(start, end)

        for cell in model.selected_cells:
            cell.is_selected = False
        model.selected_cells.clear()

        self._select_cells_in_range(start, end)
        model.store_selection(start, end)
        logger.debug("Selected range %s - %s (%d cells)",
                     start, end, len(model.selected_cells))

        model.notify_data_changed()
        listener = model.listener
        if listener is not None:
            if end is None:
                listener.on_range_started()
            else:
                listener.on_range_completed()

    def _select_cells_in_range(self, start: datetime | None,
                               end: datetime | None) -> None:
        selected_cells = self._model.selected_cells
        selecting = False
        for weeks in self._model.cells:
            for row in weeks:
                for cell in row:
                    if not cell.is_current_month:
                        continue
                    if between(cell.date, start, end, True, True):
                        selecting = True
                        cell.is_selected = True
                        selected_cells.append(cell)
                    elif selecting:
                        # Months are in date order; the run has ended.
                        return
