import customtkinter as ctk
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from ui.components.date_picker import DatePickerWidget
from utils.constants import DEFAULT_CUSTOM_COLOR, DEFAULT_CUSTOM_ICON, RECURRING_FREQUENCIES
from utils.date_helpers import today_str
from utils.exceptions import LedgerError
from utils.icons import ICON_NAMES, resolve_icon


class TransactionForm(ctk.CTkToplevel):
    """Add an income or expense, optionally creating a custom category inline."""

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        initial_type: str = "expense",
        date_format: str = "YYYY-MM-DD",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._date_format = date_format
        self.saved = False

        self.title("Add Transaction")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0
        self._label("Type:", r)
        self._type_var = ctk.StringVar(value=initial_type)
        ctk.CTkSegmentedButton(
            self, values=["expense", "income"], variable=self._type_var,
            command=lambda _: self._reload_categories(),
        ).grid(row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="w")
        r += 1

        self._label("Amount:", r)
        self._amount_var = ctk.StringVar()
        ctk.CTkEntry(self, textvariable=self._amount_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        self._label("Category:", r)
        cat_row = ctk.CTkFrame(self, fg_color="transparent")
        cat_row.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        self._cat_var = ctk.StringVar()
        self._cat_combo = ctk.CTkComboBox(
            cat_row, values=[], variable=self._cat_var, width=180, state="readonly"
        )
        self._cat_combo.pack(side="left")
        ctk.CTkButton(
            cat_row, text="+ New", width=60,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._toggle_new_category,
        ).pack(side="left", padx=(6, 0))
        r += 1

        # Inline new-category row, hidden until requested
        self._new_cat_frame = ctk.CTkFrame(self, fg_color=("gray90", "gray20"))
        self._new_cat_row = r
        self._new_name_var = ctk.StringVar()
        self._new_icon_var = ctk.StringVar(value=DEFAULT_CUSTOM_ICON)
        self._new_color_var = ctk.StringVar(value=DEFAULT_CUSTOM_COLOR)
        ctk.CTkEntry(
            self._new_cat_frame, textvariable=self._new_name_var,
            placeholder_text="Name", width=120,
        ).pack(side="left", padx=4, pady=4)
        ctk.CTkComboBox(
            self._new_cat_frame, values=[f"{resolve_icon(n)} {n}" for n in ICON_NAMES],
            width=130, state="readonly",
            command=lambda v: self._new_icon_var.set(v.split(" ", 1)[1]),
        ).pack(side="left", padx=4)
        ctk.CTkEntry(
            self._new_cat_frame, textvariable=self._new_color_var, width=80,
        ).pack(side="left", padx=4)
        ctk.CTkButton(
            self._new_cat_frame, text="Create", width=60, command=self._create_category,
        ).pack(side="left", padx=4)
        r += 1

        self._label("Date:", r)
        self._date_picker = DatePickerWidget(
            self, initial_date=today_str(), date_format=date_format,
        )
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        self._label("Description:", r)
        self._desc_var = ctk.StringVar()
        ctk.CTkEntry(self, textvariable=self._desc_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        self._label("Recurring:", r)
        self._recurring_var = ctk.BooleanVar(value=False)
        ctk.CTkCheckBox(
            self, text="", variable=self._recurring_var,
            command=self._toggle_recurring,
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        self._recurring_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._recurring_row = r
        self._freq_var = ctk.StringVar(value="monthly")
        ctk.CTkComboBox(
            self._recurring_frame, values=list(RECURRING_FREQUENCIES),
            variable=self._freq_var, width=110, state="readonly",
        ).pack(side="left")
        ctk.CTkLabel(self._recurring_frame, text="until").pack(side="left", padx=6)
        self._end_picker = DatePickerWidget(
            self._recurring_frame, date_format=date_format, allow_empty=True,
        )
        self._end_picker.pack(side="left")
        r += 1

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w"
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(btn_frame, text="Save", width=110, command=self._on_save).pack(side="right")

        self._reload_categories()
        self.transient(master)
        self.grab_set()

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    def _reload_categories(self, select: str | None = None):
        self._cats = self._cat_svc.get_for_type(self._type_var.get())
        names = [c.name for c in self._cats]
        self._cat_combo.configure(values=names)
        choice = select if select in names else (names[0] if names else "")
        self._cat_var.set(choice)
        self._cat_combo.set(choice)

    def _toggle_new_category(self):
        if self._new_cat_frame.winfo_ismapped():
            self._new_cat_frame.grid_forget()
        else:
            self._new_cat_frame.grid(
                row=self._new_cat_row, column=0, columnspan=2, padx=16, pady=4, sticky="ew"
            )

    def _toggle_recurring(self):
        if self._recurring_var.get():
            self._recurring_frame.grid(
                row=self._recurring_row, column=1, padx=(0, 16), pady=4, sticky="w"
            )
        else:
            self._recurring_frame.grid_forget()

    def _create_category(self):
        try:
            cat = self._cat_svc.create_custom(
                self._new_name_var.get(), self._type_var.get(),
                self._new_icon_var.get(), self._new_color_var.get(),
            )
        except LedgerError as e:
            self._error_var.set(str(e))
            return
        self._error_var.set("")
        self._new_name_var.set("")
        self._new_cat_frame.grid_forget()
        self._reload_categories(select=cat.name)

    def _on_save(self):
        cat = next((c for c in self._cats if c.name == self._cat_var.get()), None)
        if not self._amount_var.get().strip() or cat is None:
            self._error_var.set("Please fill in all required fields.")
            return
        if not self._date_picker.is_valid():
            self._error_var.set("Invalid date.")
            return
        is_recurring = self._recurring_var.get()
        if is_recurring and not self._end_picker.is_valid():
            self._error_var.set("Invalid end date.")
            return

        try:
            self._tx_svc.add_transaction(
                type_=self._type_var.get(),
                amount=self._amount_var.get(),
                category_id=cat.id,
                date=self._date_picker.get(),
                description=self._desc_var.get(),
                is_recurring=is_recurring,
                recurring_frequency=self._freq_var.get() if is_recurring else None,
                recurring_end_date=(self._end_picker.get() or None) if is_recurring else None,
            )
        except LedgerError as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()
