"""System-tray icon setup via pystray."""

import logging
from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu

from calendar_model import CalendarModel
from icon_gen import create_icon_image, icon_text
from range_selector import RangeListener

logger = logging.getLogger(__name__)


def tray_title(start: date | None, end: date | None) -> str:
    if start is None:
        return "Mini Range Picker – no range"
    if end is None:
        return f"Mini Range Picker – from {start:%d.%m.%Y}"
    return f"Mini Range Picker – {start:%d.%m.%Y} → {end:%d.%m.%Y}"


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    menu = Menu(
        MenuItem("Show Range Picker", lambda _icon, _item: on_show(), default=True),
        Menu.SEPARATOR,
        MenuItem("Exit", lambda _icon, _item: on_exit()),
    )
    return pystray.Icon("mini-range-picker", icon_image, tray_title(None, None), menu)


class TrayRangeListener(RangeListener):
    """Mirrors the model's selected range in the tray tooltip and image."""

    def __init__(self, icon: pystray.Icon, model: CalendarModel) -> None:
        self._icon = icon
        self._model = model

    def _update(self) -> None:
        start, end = self._model.selected_start, self._model.selected_end
        self._icon.title = tray_title(start, end)
        self._icon.icon = create_icon_image(icon_text(start, end, self._model.today))
        logger.info("Tray updated: %s", self._icon.title)

    def on_range_started(self) -> None:
        self._update()

    def on_range_completed(self) -> None:
        self._update()
