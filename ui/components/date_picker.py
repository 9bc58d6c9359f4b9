import customtkinter as ctk
from tkcalendar import Calendar
from datetime import date
from utils.date_helpers import (
    parse_date, format_date, format_display_date, parse_display_date,
)


class DatePickerWidget(ctk.CTkFrame):
    """Entry in the display format plus a calendar popup.

    .get() returns YYYY-MM-DD (or '' when empty); .set() takes YYYY-MM-DD.
    """

    def __init__(
        self,
        master,
        initial_date: str | None = None,
        date_format: str = "YYYY-MM-DD",
        allow_empty: bool = False,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._date_format = date_format
        self._allow_empty = allow_empty
        self._popup: ctk.CTkToplevel | None = None

        self._var = ctk.StringVar(
            value=format_display_date(initial_date, date_format) if initial_date else ""
        )
        self._entry = ctk.CTkEntry(self, textvariable=self._var, width=120)
        self._entry.grid(row=0, column=0, sticky="ew")
        ctk.CTkButton(self, text="📅", width=32, command=self._toggle_popup).grid(
            row=0, column=1, padx=(4, 0)
        )

    def _parsed(self) -> date | None:
        raw = self._var.get().strip()
        if not raw:
            return None
        return parse_display_date(raw, self._date_format)

    def get(self) -> str:
        d = self._parsed()
        return format_date(d) if d else self._var.get().strip()

    def set(self, date_str: str | None):
        self._var.set(format_display_date(date_str, self._date_format) if date_str else "")

    def is_valid(self) -> bool:
        if not self._var.get().strip():
            return self._allow_empty
        return self._parsed() is not None

    def _toggle_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._popup.destroy()
            self._popup = None
            return

        current = self._parsed() or date.today()
        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        self._popup = popup

        # The calendar works in ISO; the entry shows the display format
        cal = Calendar(
            popup, selectmode="day",
            year=current.year, month=current.month, day=current.day,
            date_pattern="yyyy-mm-dd", firstweekday="sunday",
        )
        cal.pack(padx=4, pady=4)
        cal.bind("<<CalendarSelected>>", lambda e: self._on_selected(cal.get_date()))

        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")

    def _on_selected(self, iso: str):
        d = parse_date(iso)
        self.set(format_date(d) if d else iso)
        if self._popup:
            self._popup.destroy()
            self._popup = None
