"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import logging
import threading
from datetime import date

from calendar_model import CalendarModel
from calendar_window import CalendarWindow
from icon_gen import create_icon_image, icon_text
from logging_config import setup_logging
from settings import domain_bounds, load_settings
from tray_icon import TrayRangeListener, create_tray

logger = logging.getLogger(__name__)


def build_model(settings: dict, today: date | None = None) -> CalendarModel:
    """Create a model over the configured domain, starting at *today*."""
    today = today or date.today()
    model = CalendarModel(
        first_weekday=settings["first_weekday"],
        month_label_format=settings["month_label_format"],
    )
    domain_min, domain_max = domain_bounds(settings, today)
    model.init_domain(domain_min, domain_max)
    logger.info("Domain %s .. %s (exclusive), %d months",
                domain_min, domain_max, len(model.months))
    return model


def main() -> None:
    settings = load_settings()
    setup_logging(settings["log_level"])

    model = build_model(settings)
    cal_win = CalendarWindow(model)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    tray = create_tray(create_icon_image(icon_text(None, None, model.today)),
                       on_show, on_exit)
    model.set_listener(TrayRangeListener(tray, model))

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    cal_win.show()
    # tkinter main loop on the main thread
    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
