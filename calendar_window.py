"""Multi-month range picker window (tkinter) — renders a CalendarModel."""

from datetime import date
from tkinter import font as tkfont
import logging
import tkinter as tk

from calendar_logic import (
    MonthCellDescriptor,
    MonthDescriptor,
    WeekMatrix,
    day_of_year,
    iso_week_numbers,
    weekday_headers,
)
from calendar_model import CalendarModel
from settings import load_settings, save_settings

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
WN_FG = "#888888"
FILL_FG = "#CCCCCC"
UNSELECTABLE_FG = "#AAAAAA"

MAX_WEEKS = 6


class _MonthPanel:
    """Pre-allocated widget pool for a single month (header + 6 weeks max)."""

    __slots__ = ("frame", "header", "wk_header", "day_headers",
                 "week_nums", "day_cells")

    def __init__(self, parent: tk.Frame, fonts: dict, headers: list[str],
                 on_press) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)

        self.header = tk.Label(
            self.frame, font=fonts["header"], bg=HEADER_BG, fg="#333333",
        )
        self.header.grid(row=0, column=0, columnspan=8, sticky="we", pady=(0, 2))

        self.wk_header = tk.Label(
            self.frame, text="Wk", font=fonts["bold"], bg=GRID_BG, fg=WN_FG, width=3,
        )
        self.wk_header.grid(row=1, column=0)

        self.day_headers: list[tk.Label] = []
        for col, abbr in enumerate(headers):
            fg = "#CC0000" if abbr in ("Sat", "Sun") else "#333333"
            lbl = tk.Label(
                self.frame, text=abbr, font=fonts["bold"], bg=GRID_BG, fg=fg, width=3,
            )
            lbl.grid(row=1, column=col + 1)
            self.day_headers.append(lbl)

        _cell_w = fonts["cell_w"]
        _cell_h = fonts["cell_h"]

        self.week_nums: list[tk.Label] = []
        self.day_cells: list[list[tk.Canvas]] = []
        for r in range(MAX_WEEKS):
            grid_row = r + 2
            wn = tk.Label(
                self.frame, font=fonts["wn"], bg=GRID_BG, fg=WN_FG, width=3,
            )
            wn.grid(row=grid_row, column=0)
            self.week_nums.append(wn)

            row_cells: list[tk.Canvas] = []
            for c in range(7):
                cell = tk.Canvas(
                    self.frame, width=_cell_w, height=_cell_h,
                    bg=GRID_BG, highlightthickness=0, borderwidth=0,
                )
                cell.grid(row=grid_row, column=c + 1)
                # Bound once — handler checks _widget_dates
                cell.bind("<ButtonPress-1>", on_press)
                row_cells.append(cell)
            self.day_cells.append(row_cells)


class CalendarWindow:
    """Window showing every month of a CalendarModel; clicks pick a date range."""

    def __init__(self, model: CalendarModel) -> None:
        self.model = model
        self.root = tk.Tk()
        self.root.title(self._title())
        self.root.resizable(True, True)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self._setup_fonts()

        settings = load_settings()
        self._grid_cols: int = settings["grid_cols"]
        self._saved_width: int | None = settings["window_width"]
        self._saved_height: int | None = settings["window_height"]

        # Widget-to-date mapping (filled during _refresh)
        self._widget_dates: dict[int, date] = {}
        self._footer_label: tk.Label | None = None

        _tmp = tk.Label(self.root, text="00", font=self.font_normal, width=3)
        _tmp.update_idletasks()
        _cw = _tmp.winfo_reqwidth()
        _ch = _tmp.winfo_reqheight()
        _tmp.destroy()
        self._panel_fonts = {
            "header": self.font_header, "bold": self.font_bold,
            "normal": self.font_normal, "wn": self.font_wn,
            "cell_w": _cw, "cell_h": _ch,
        }

        self._panels: list[_MonthPanel] = []
        self._months_frame: tk.Frame | None = None
        self._build_shell()

        model.add_data_changed_callback(self._refresh)
        self._refresh()

        self.root.bind("<Escape>", lambda _e: self.hide())
        self.root.bind("<Configure>", self._on_configure)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=10, weight="bold")
        self.font_wn = tkfont.Font(family=base, size=8)
        self.font_footer = tkfont.Font(family=base, size=9)

    @staticmethod
    def _title() -> str:
        return f"Mini Range Picker  Day: {day_of_year(date.today())}"

    # ------------------------------------------------------------------
    # Build shell (once) — months placeholder + footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        self._outer = tk.Frame(self.root, bg=GRID_BG)
        self._outer.pack(padx=6, pady=4)

        self._months_frame = tk.Frame(self._outer, bg=GRID_BG)
        self._months_frame.pack()

        self._footer_label = tk.Label(
            self._outer, text="", font=self.font_footer,
            bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(pady=(4, 0))

    # ------------------------------------------------------------------
    # Redraw from the model using pooled panels
    # ------------------------------------------------------------------
    def _refresh(self) -> None:
        """Re-read months and cells from the model and redraw every panel."""
        grids = self.model.month_grids()
        self._widget_dates.clear()

        headers = weekday_headers(self.model.first_weekday)
        while len(self._panels) < len(grids):
            self._panels.append(_MonthPanel(
                self._months_frame, self._panel_fonts, headers, self._on_press,
            ))

        for i, (month, weeks) in enumerate(grids):
            panel = self._panels[i]
            panel.frame.grid(row=i // self._grid_cols, column=i % self._grid_cols,
                             padx=6, pady=2, sticky="n")
            self._fill_panel(panel, month, weeks)

        for i in range(len(grids), len(self._panels)):
            self._panels[i].frame.grid_forget()

        if self._footer_label:
            self._footer_label.configure(text=self._footer_text())
        logger.debug("Redrew %d months", len(grids))

    def _fill_panel(self, panel: _MonthPanel, month: MonthDescriptor,
                    weeks: WeekMatrix) -> None:
        """Reconfigure an existing panel's widgets — no widget creation."""
        panel.header.configure(text=month.label)
        week_nums = iso_week_numbers(weeks)

        for r in range(MAX_WEEKS):
            if r < len(weeks):
                panel.week_nums[r].configure(text=week_nums[r])
                for c, cell in enumerate(weeks[r]):
                    canvas = panel.day_cells[r][c]
                    bg, fg = self._day_colors(cell)
                    self._draw_cell(
                        canvas, str(cell.value), bg, fg,
                        self.font_bold if cell.is_today else self.font_normal,
                        cursor="hand2" if cell.is_selectable else "",
                    )
                    if cell.is_current_month:
                        self._widget_dates[id(canvas)] = cell.date
                    else:
                        self._widget_dates.pop(id(canvas), None)
            else:
                panel.week_nums[r].configure(text="")
                for canvas in panel.day_cells[r]:
                    canvas.delete("all")
                    canvas.configure(bg=GRID_BG, cursor="")

    # ------------------------------------------------------------------
    # Day colour logic
    # ------------------------------------------------------------------
    @staticmethod
    def _day_colors(cell: MonthCellDescriptor) -> tuple[str, str]:
        if not cell.is_current_month:
            return GRID_BG, FILL_FG
        if cell.is_selected:
            return SEL_BG, ACCENT if cell.is_today else "black"
        if cell.is_today:
            return ACCENT, "white"
        if not cell.is_selectable:
            return GRID_BG, UNSELECTABLE_FG
        return GRID_BG, "black"

    def _draw_cell(self, canvas: tk.Canvas, text: str, bg: str,
                   fg: str, font, cursor: str = "") -> None:
        canvas.delete("all")
        w = canvas.winfo_width()
        h = canvas.winfo_height()
        if w <= 1:
            w = int(canvas["width"]) + 2
        if h <= 1:
            h = int(canvas["height"]) + 2
        canvas.configure(bg=bg, cursor=cursor)
        canvas.create_text(w // 2, h // 2, text=text, fill=fg, font=font)

    # ------------------------------------------------------------------
    # Click forwarding
    # ------------------------------------------------------------------
    def _on_press(self, event: tk.Event) -> None:
        d = self._widget_dates.get(id(event.widget))
        if d:
            self.model.notify_cell_clicked(d)

    # ------------------------------------------------------------------
    # Footer text
    # ------------------------------------------------------------------
    def _footer_text(self) -> str:
        today_str = f"Today: {date.today().strftime('%d.%m.%Y')}"
        start, end = self.model.selected_start, self.model.selected_end
        if start is None:
            return today_str
        if end is None:
            return f"From {start.strftime('%d.%m.%Y')} → ?     {today_str}"

        total_days = (end - start).days + 1
        full_weeks, rem_days = divmod(total_days, 7)

        parts: list[str] = []
        if full_weeks:
            parts.append(f"{full_weeks} week{'s' if full_weeks != 1 else ''}")
        if rem_days:
            parts.append(f"{rem_days} day{'s' if rem_days != 1 else ''}")

        range_str = f"{start.strftime('%d.%m')} → {end.strftime('%d.%m')}"
        return f"{range_str}:  {total_days} days  ({', '.join(parts)})     {today_str}"

    # ------------------------------------------------------------------
    # Resize handling — track size, persisted on hide
    # ------------------------------------------------------------------
    def _on_configure(self, event: tk.Event) -> None:
        if event.widget is not self.root:
            return
        self._saved_width = self.root.winfo_width()
        self._saved_height = self.root.winfo_height()

    def _persist_size(self) -> None:
        settings = load_settings()
        settings["window_width"] = self._saved_width
        settings["window_height"] = self._saved_height
        save_settings(settings)

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.root.title(self._title())
        self.root.deiconify()
        self.root.update_idletasks()
        if self._saved_width is not None and self._saved_height is not None:
            self._position_window(override_size=(self._saved_width, self._saved_height))
        else:
            self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        if self._saved_width is not None and self._saved_height is not None:
            self._persist_size()
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Position bottom-right of the screen
    # ------------------------------------------------------------------
    def _position_window(self, override_size: tuple[int, int] | None = None) -> None:
        self.root.update_idletasks()
        if override_size:
            win_w, win_h = override_size
        else:
            win_w = self.root.winfo_reqwidth()
            win_h = self.root.winfo_reqheight()

        x = self.root.winfo_screenwidth() - win_w - 12
        y = self.root.winfo_screenheight() - win_h - 60
        self.root.geometry(f"{win_w}x{win_h}+{x}+{y}")
